import uuid

from flask import Flask, g, request
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def create_app(config_name: str = 'default'):
    """Application factory pattern"""
    from config import config

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    from league.logger import configure_logging
    configure_logging(app)

    # Initialize extensions
    from league.db_utils import enable_sqlite_foreign_keys
    from league.extensions import limiter
    enable_sqlite_foreign_keys()
    db.init_app(app)
    limiter.init_app(app)

    @app.before_request
    def assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex[:12]

    # Services hold the signing secret and policy built from this config
    from league.services import init_services
    init_services(app)

    # Register blueprints
    from league.routes import main_bp, api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    from league.errors import register_error_handlers
    register_error_handlers(app)

    from league.cli import register_commands
    register_commands(app)

    # Create database tables
    with app.app_context():
        from league import models  # noqa: F401
        db.create_all()

    return app
