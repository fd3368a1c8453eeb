"""
Projects Routes - Portfolio projects API
"""

from flask import jsonify
from utils.data import list_projects, get_project, create_project, delete_project, project_to_dict
from utils.decorators import json_body
from . import projects_bp


@projects_bp.route('', methods=['GET'])
def index():
    """List projects, newest date first, undated ones after by creation time"""
    return jsonify([project_to_dict(p) for p in list_projects()]), 200


@projects_bp.route('/<project_id>', methods=['GET'])
def detail(project_id):
    project = get_project(project_id)
    if not project:
        return jsonify({'error': 'Project not found'}), 404
    return jsonify(project_to_dict(project)), 200


@projects_bp.route('', methods=['POST'])
@json_body
def create(payload):
    project = create_project(payload)
    return jsonify(project_to_dict(project)), 201


@projects_bp.route('/<project_id>', methods=['DELETE'])
def delete(project_id):
    if not delete_project(project_id):
        return jsonify({'error': 'Project not found'}), 404
    return jsonify({'message': 'Project deleted successfully'}), 200
