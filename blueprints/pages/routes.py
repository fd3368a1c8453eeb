"""
Pages Routes - Service status
"""

from flask import jsonify, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from extensions import db
from . import pages_bp


@pages_bp.route('/')
def index():
    """Root banner used by uptime checks and the client's API probe"""
    return jsonify({'ok': True, 'message': 'Portfolio Backend is running'}), 200


@pages_bp.route('/health')
def health_check():
    """Health check including a database round trip"""
    try:
        db.session.execute(text('SELECT 1'))
        database = 'ok'
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Health check database error: {str(e)}")
        database = 'error'

    status_code = 200 if database == 'ok' else 503
    return jsonify({'status': 'ok', 'database': database}), status_code
