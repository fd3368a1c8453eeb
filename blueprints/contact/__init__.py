"""
Contact Blueprint - Public contact form submissions
Handles: Validation, persistence and best-effort email relay
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api/contact')

from . import routes
