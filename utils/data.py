"""
Data Management Module - Queries, persistence and JSON serialization
for portfolio records
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError
from extensions import db
from models import Project, Experience, Achievement, Contact
from .dates import isoformat_utc
from .validation import (
    ValidationError,
    normalize_project,
    normalize_experience,
    normalize_achievement,
    normalize_contact
)


def _newest_first(date_column, created_column):
    """Order by a date column descending with undated rows last, then by creation time"""
    return (date_column.is_(None), date_column.desc(), created_column.desc())


def _timestamps(record):
    return {
        'createdAt': isoformat_utc(record.created_at),
        'updatedAt': isoformat_utc(record.updated_at),
    }


# ---------------------- Serializers ----------------------

def project_to_dict(project):
    """Convert project model to dictionary"""
    data = {
        '_id': project.id,
        'id': project.id,
        'name': project.name,
        'slug': project.slug,
        'description': project.description,
        'date': isoformat_utc(project.date),
        'dateText': project.date_text,
        'tech': project.tech or [],
        'tags': project.tags or [],
        'image': project.image,
        'link': project.link,
        'url': project.url,
        'demo': project.demo,
        'github': project.github,
        'repo': project.repo,
        'source': project.source,
    }
    data.update(_timestamps(project))
    return data


def experience_to_dict(exp):
    """Convert experience model to dictionary"""
    data = {
        '_id': exp.id,
        'id': exp.id,
        'role': exp.role,
        'company': exp.company,
        'type': exp.type,
        'employmentType': exp.employment_type,
        'location': exp.location,
        'startDate': isoformat_utc(exp.start_date),
        'endDate': isoformat_utc(exp.end_date),
        'current': bool(exp.current),
        'startText': exp.start_text,
        'endText': exp.end_text,
        'duration': exp.duration,
        'description': exp.description,
        'bullets': exp.bullets or [],
        'tags': exp.tags or [],
        'tech': exp.tech or [],
        'skills': exp.skills or [],
        'link': exp.link,
        'url': exp.url,
        'companyUrl': exp.company_url,
        'certificate': exp.certificate,
        'logo': exp.logo,
        'image': exp.image,
    }
    data.update(_timestamps(exp))
    return data


def achievement_to_dict(ach):
    """Convert achievement model to dictionary"""
    data = {
        '_id': ach.id,
        'id': ach.id,
        'title': ach.title,
        'description': ach.description,
        'date': isoformat_utc(ach.date),
        'dateText': ach.date_text,
        'category': ach.category,
        'tags': ach.tags or [],
        'link': ach.link,
        'certificate': ach.certificate,
        'url': ach.url,
        'image': ach.image,
    }
    data.update(_timestamps(ach))
    return data


def contact_to_dict(contact):
    """Convert contact model to dictionary"""
    data = {
        '_id': contact.id,
        'id': contact.id,
        'name': contact.name,
        'email': contact.email,
        'message': contact.message,
        'subject': contact.subject,
        'phone': contact.phone,
        'status': contact.status,
        'meta': {
            'ip': contact.meta_ip,
            'userAgent': contact.meta_user_agent,
            'page': contact.meta_page,
        },
    }
    data.update(_timestamps(contact))
    return data


# ---------------------- Projects ----------------------

def list_projects():
    return Project.query.order_by(*_newest_first(Project.date, Project.created_at)).all()


def get_project(project_id):
    return db.session.get(Project, project_id)


def get_project_by_slug(slug):
    return Project.query.filter_by(slug=slug).first()


def create_project(payload):
    """Validate and persist a project; raises ValidationError"""
    values = normalize_project(payload)
    if values['slug'] and get_project_by_slug(values['slug']):
        raise ValidationError('Project slug already exists', 'slug')

    project = Project(**values)
    db.session.add(project)
    try:
        db.session.commit()
    except IntegrityError:
        # Lost a race on the unique slug
        db.session.rollback()
        raise ValidationError('Project slug already exists', 'slug')
    current_app.logger.info(f"Project created: {project.id} ({project.slug})")
    return project


def delete_project(project_id):
    """Delete a project; returns False if it does not exist"""
    project = get_project(project_id)
    if not project:
        return False
    db.session.delete(project)
    db.session.commit()
    current_app.logger.info(f"Project deleted: {project_id}")
    return True


# ---------------------- Experience ----------------------

def list_experience():
    return Experience.query.order_by(
        *_newest_first(Experience.start_date, Experience.created_at)).all()


def create_experience(payload):
    exp = Experience(**normalize_experience(payload))
    db.session.add(exp)
    db.session.commit()
    current_app.logger.info(f"Experience created: {exp.id} ({exp.role} @ {exp.company})")
    return exp


# ---------------------- Achievements ----------------------

def list_achievements():
    return Achievement.query.order_by(
        *_newest_first(Achievement.date, Achievement.created_at)).all()


def create_achievement(payload):
    ach = Achievement(**normalize_achievement(payload))
    db.session.add(ach)
    db.session.commit()
    current_app.logger.info(f"Achievement created: {ach.id}")
    return ach


# ---------------------- Contact ----------------------

def save_contact(payload, meta=None):
    """Validate and commit a contact message before any notification runs"""
    contact = Contact(**normalize_contact(payload, meta=meta))
    db.session.add(contact)
    db.session.commit()
    current_app.logger.info(f"Contact message saved: {contact.id}")
    return contact


__all__ = [
    'project_to_dict',
    'experience_to_dict',
    'achievement_to_dict',
    'contact_to_dict',
    'list_projects',
    'get_project',
    'get_project_by_slug',
    'create_project',
    'delete_project',
    'list_experience',
    'create_experience',
    'list_achievements',
    'create_achievement',
    'save_contact'
]
