import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration"""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', 'sqlite:///gharsathi.db')
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 280,
    }

    # JWT Configuration
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-key-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)
    JWT_TOKEN_LOCATION = ['headers']
    JWT_HEADER_NAME = 'Authorization'
    JWT_HEADER_TYPE = 'Bearer'

    # Password hashing (bcrypt cost factor)
    BCRYPT_LOG_ROUNDS = int(os.getenv('BCRYPT_LOG_ROUNDS', 10))

    # File Upload Configuration
    UPLOAD_MAX_FILES = 10
    UPLOAD_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB per image
    MAX_CONTENT_LENGTH = UPLOAD_MAX_FILES * UPLOAD_MAX_FILE_SIZE + 1024 * 1024
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', 'uploads')
    IMAGE_MAX_DIMENSIONS = (1200, 800)

    # S3 image storage (local disk is used when these are missing)
    AWS_ACCESS_KEY_ID = os.getenv('AWS_ACCESS_KEY_ID')
    AWS_SECRET_ACCESS_KEY = os.getenv('AWS_SECRET_ACCESS_KEY')
    S3_BUCKET_NAME = os.getenv('S3_BUCKET_NAME')
    AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')
    S3_IMAGE_FOLDER = os.getenv('S3_IMAGE_FOLDER', 'gharsathi/listings')

    # Listing moderation: new listings stay hidden until an admin approves them
    AUTO_APPROVE_LISTINGS = os.getenv('AUTO_APPROVE_LISTINGS', 'False') == 'True'

    # Admin provisioning (used by `flask create-admin`)
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    ADMIN_NAME = os.getenv('ADMIN_NAME', 'System Admin')

    # Rate limiting
    RATELIMIT_ENABLED = os.getenv('RATELIMIT_ENABLED', 'True') == 'True'
    RATELIMIT_STORAGE_URI = os.getenv('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_DEFAULT = '200 per day;50 per hour'
    RATELIMIT_HEADERS_ENABLED = True

    # Logging / error reporting
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    SHOW_ERROR_DETAILS = False

    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:5173')
    CORS_ORIGINS = [
        FRONTEND_URL,
        'http://localhost:5173',
        'http://127.0.0.1:5173',
    ]


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')
    SHOW_ERROR_DETAILS = True


class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    TESTING = False
    SHOW_ERROR_DETAILS = False


class TestingConfig(Config):
    """Testing configuration"""
    DEBUG = False
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = 'testing-jwt-secret-key-of-sufficient-length'
    SECRET_KEY = 'testing-secret-key'
    BCRYPT_LOG_ROUNDS = 4
    RATELIMIT_ENABLED = False
    AWS_ACCESS_KEY_ID = None
    AWS_SECRET_ACCESS_KEY = None
    S3_BUCKET_NAME = None
    AUTO_APPROVE_LISTINGS = False
    ADMIN_EMAIL = None
    ADMIN_PASSWORD = None
    LOG_LEVEL = 'WARNING'
    SHOW_ERROR_DETAILS = False


# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
