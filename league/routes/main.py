"""
Main routes for the league application.

Handles:
- Health check
"""

from datetime import datetime, timezone

from flask import jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from league import db
from league.logger import get_logger
from league.routes import main_bp

logger = get_logger(__name__)


@main_bp.route('/health')
def health_check():
    """Health check endpoint for load balancers and orchestration.

    Returns:
        JSON with health status and database connectivity
    """
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({
            'status': 'healthy',
            'database': 'connected',
            'timestamp': datetime.now(timezone.utc).isoformat()
        })
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'database': 'disconnected',
        }), 503
