"""
Seed Module - Load portfolio content from a JSON document

The document may hold ``projects``, ``experience`` and ``achievements``
arrays using the same keys the POST routes accept. Each record goes through
the normal validation; invalid records are logged and skipped, and projects
whose slug already exists are left untouched so seeding can be re-run.

Usage:
    flask --app app seed-data content.json
"""

import json
from flask import current_app
from extensions import db
from .data import create_project, create_experience, create_achievement, get_project_by_slug
from .validation import ValidationError, clean_str, slugify


def _seed(kind, items, create):
    created = skipped = 0
    if not isinstance(items, list):
        return created, skipped
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            current_app.logger.warning(f"  {kind}[{index}] is not an object, skipping...")
            skipped += 1
            continue
        try:
            create(item)
            created += 1
        except ValidationError as e:
            db.session.rollback()
            current_app.logger.warning(f"  {kind}[{index}] invalid ({e.message}), skipping...")
            skipped += 1
    return created, skipped


def _create_project_once(item):
    slug = clean_str(item.get('slug')) or slugify(clean_str(item.get('name')) or '')[:120]
    if slug and get_project_by_slug(slug):
        raise ValidationError(f"Project {slug} already exists")
    return create_project(item)


def seed_data(data):
    """
    Seed all supported collections from a decoded document

    Returns:
        dict: {kind: {'created': n, 'skipped': n}}
    """
    if not isinstance(data, dict):
        raise ValueError('Seed document must be a JSON object')

    results = {}
    for kind, create in (
        ('projects', _create_project_once),
        ('experience', create_experience),
        ('achievements', create_achievement),
    ):
        items = data.get(kind, [])
        current_app.logger.info(f"Seeding {len(items) if isinstance(items, list) else 0} {kind}...")
        created, skipped = _seed(kind, items, create)
        results[kind] = {'created': created, 'skipped': skipped}
    return results


def seed_file(path):
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return seed_data(data)


__all__ = ['seed_data', 'seed_file']
