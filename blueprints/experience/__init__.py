"""
Experience Blueprint - Work history API
"""

from flask import Blueprint

experience_bp = Blueprint('experience', __name__, url_prefix='/api/experience')

from . import routes
