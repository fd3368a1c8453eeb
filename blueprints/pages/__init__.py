"""
Pages Blueprint - Service status routes
Handles: Root banner, health check
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__)

from . import routes
