"""
WSGI entry point for production servers.

Example:
    gunicorn wsgi:application

Required environment variables in production:
    SECRET_KEY, JWT_SECRET_KEY, DATABASE_URL
"""

import os

from league import create_app

application = create_app(os.environ.get('FLASK_CONFIG', 'production'))
