"""
Database configuration and initialization
"""

import os
import sys
from peewee import SqliteDatabase
from dotenv import load_dotenv

# Load environment variables from current directory only
# This prevents loading .env files from parent directories
dotenv_path = os.path.join(os.getcwd(), '.env')
load_dotenv(dotenv_path=dotenv_path)

# Database configuration - require explicit DATABASE_PATH
DATABASE_PATH = os.getenv('DATABASE_PATH')
if not DATABASE_PATH:
    print("❌ DATABASE_PATH environment variable is not set!")
    print("💡 Please set DATABASE_PATH in your .env file or environment variables")
    print("   Example: DATABASE_PATH=scene.db")
    print(f"   Current working directory: {os.getcwd()}")
    print(f"   Looked for .env file in: {os.path.join(os.getcwd(), '.env')}")
    sys.exit(1)

# Writers wait on each other instead of failing fast with "database is locked"
database = SqliteDatabase(DATABASE_PATH, timeout=15, pragmas={'foreign_keys': 1})


def get_models():
    """Return every model class, in dependency order"""
    from scene.models.user import User
    from scene.models.event import Event
    from scene.models.attendee import Attendee
    from scene.models.message import Message
    from scene.models.promo_content import PromoContent
    from scene.models.recap_photo import RecapPhoto

    return [User, Event, Attendee, Message, PromoContent, RecapPhoto]


def init_database():
    """Initialize database and create all tables"""
    abs_db_path = os.path.abspath(DATABASE_PATH)
    print(f"🗄️  Opening database: {abs_db_path}")

    db_dir = os.path.dirname(abs_db_path) or os.getcwd()
    if not os.path.exists(db_dir):
        print(f"❌ Database directory does not exist: {db_dir}")
        print("💡 Create the directory or specify a valid DATABASE_PATH")
        sys.exit(1)

    if not os.access(db_dir, os.W_OK):
        print(f"❌ Database directory is not writable: {db_dir}")
        print("💡 Check directory permissions or run with appropriate privileges")
        sys.exit(1)

    if os.path.exists(abs_db_path):
        if not os.access(abs_db_path, os.W_OK):
            print(f"❌ Database file is not writable: {abs_db_path}")
            sys.exit(1)
        print(f"📊 Database file exists ({os.path.getsize(abs_db_path)} bytes)")
    else:
        print(f"🔧 Database file will be created: {abs_db_path}")

    try:
        database.connect(reuse_if_open=True)
        database.create_tables(get_models(), safe=True)
        print(f"✅ Database initialized successfully: {abs_db_path}")
    except Exception as e:
        print(f"❌ Failed to initialize database: {e}")
        print(f"💡 Check database path and permissions: {abs_db_path}")
        sys.exit(1)
    finally:
        if not database.is_closed():
            database.close()


def get_database():
    """Get database instance"""
    return database
