from flask import Blueprint, jsonify, current_app

bp = Blueprint('status', __name__)


@bp.route('/health')
def health():
    """Report which optional integrations are enabled"""
    return jsonify({
        'status': 'ok',
        'payments': current_app.extensions['scene.payments'].enabled,
        'ai': current_app.extensions['scene.copywriter'].enabled,
    })
