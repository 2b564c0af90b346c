import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env file
BASE_DIR = os.path.abspath(os.path.dirname(__file__))
dotenv_path = os.path.join(BASE_DIR, '.env')

# Load the .env file from that specific path
load_dotenv(dotenv_path=dotenv_path)


class Config:
    """Base configuration class."""

    SECRET_KEY = os.getenv('SECRET_KEY') or 'dev-fallback-secret-key-change-in-prod'
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL') or \
        'sqlite:///' + os.path.join(BASE_DIR, 'findmyrun.db')

    # Flask-SQLAlchemy settings
    SQLALCHEMY_ENGINE_OPTIONS = {'pool_recycle': 280}
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Shared secret: signs magic-link tokens and guards the admin API
    ADMIN_SECRET = os.getenv('ADMIN_SECRET') or 'dev-secret-change-in-production'
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL')

    # Public site that hosts the result pages and receives emailed links
    APP_URL = os.getenv('APP_URL', 'http://localhost:3000').rstrip('/')

    TOKEN_EXPIRY_DAYS = int(os.getenv('TOKEN_EXPIRY_DAYS', 7))

    # Owner login
    LOGIN_LINK_TTL = timedelta(hours=1)
    OWNER_SESSION_TTL = timedelta(days=7)
    OWNER_SESSION_COOKIE = 'owner_session'
    SESSION_COOKIE_SECURE = os.getenv('FLASK_ENV') == 'production'

    # Geocoding
    MAPBOX_TOKEN = os.getenv('MAPBOX_TOKEN')
    GEOCODE_TIMEOUT = float(os.getenv('GEOCODE_TIMEOUT', 5))

    # Flask-Caching (geocode results)
    CACHE_TYPE = os.getenv('CACHE_TYPE', 'SimpleCache')
    CACHE_DEFAULT_TIMEOUT = 60 * 60 * 24

    # Seed import
    SEED_DATA_PATH = os.getenv('SEED_DATA_PATH', os.path.join(BASE_DIR, 'data', 'seed_clubs.json'))
    SEED_BATCH_SIZE = 20

    # Email configuration
    MAIL_SERVER = os.getenv('MAIL_SERVER', 'smtp.googlemail.com')
    MAIL_PORT = int(os.getenv('MAIL_PORT', 587))
    MAIL_USE_TLS = os.getenv('MAIL_USE_TLS', 'true').lower() in ['true', 'on', '1']
    MAIL_USERNAME = os.getenv('MAIL_USERNAME')
    MAIL_PASSWORD = os.getenv('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER = os.getenv('MAIL_DEFAULT_SENDER', 'Find My Run <hello@findmyrun.club>')
