#!/usr/bin/env python3
"""
Main server entry point for the Scene events API
"""

import logging
import os

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(name)s - %(message)s')
    print("🚀 Starting Scene server...")
    from scene.app import app
    port = int(os.getenv('PORT', '3001'))
    print(f"🌐 Server starting on http://localhost:{port}")
    app.run(debug=os.getenv('FLASK_DEBUG') == '1', host='0.0.0.0', port=port, threaded=True)
