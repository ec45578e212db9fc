"""
Flask extensions initialization.

Extensions are initialized here and imported by the app factory.
"""

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Rate limiter - storage and on/off come from RATELIMIT_* config in init_app()
limiter = Limiter(key_func=get_remote_address)
