"""
Achievements Routes - Awards and certifications API
"""

from flask import jsonify
from utils.data import list_achievements, create_achievement, achievement_to_dict
from utils.decorators import json_body
from . import achievements_bp


@achievements_bp.route('', methods=['GET'])
def index():
    return jsonify([achievement_to_dict(a) for a in list_achievements()]), 200


@achievements_bp.route('', methods=['POST'])
@json_body
def create(payload):
    ach = create_achievement(payload)
    return jsonify(achievement_to_dict(ach)), 201
