"""
Projects Blueprint - Portfolio projects API
Handles: Listing, detail, creation and deletion of projects
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
