"""
Experience Routes - Work history API
"""

from flask import jsonify
from utils.data import list_experience, create_experience, experience_to_dict
from utils.decorators import json_body
from . import experience_bp


@experience_bp.route('', methods=['GET'])
def index():
    """List experience by start date (latest first), then creation time"""
    return jsonify([experience_to_dict(e) for e in list_experience()]), 200


@experience_bp.route('', methods=['POST'])
@json_body
def create(payload):
    """Create an experience entry; duration is filled in when missing"""
    exp = create_experience(payload)
    return jsonify(experience_to_dict(exp)), 201
