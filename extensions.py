"""
Flask extensions
Created unbound here and attached to the app in create_app(), so models,
services and blueprints can import them without importing the app.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_bcrypt import Bcrypt
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


db = SQLAlchemy()
migrate = Migrate(compare_type=True)

# Token settings come from JWT_* keys; callbacks live in app/utils/jwt_handlers.py
jwt = JWTManager()

# Cost factor from BCRYPT_LOG_ROUNDS
bcrypt = Bcrypt()

cors = CORS()

# Limits, storage and the on/off switch come from RATELIMIT_* keys
limiter = Limiter(key_func=get_remote_address)
