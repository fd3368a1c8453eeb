"""
Validation Module - Record validation and normalization

Each ``normalize_*`` function takes a decoded JSON payload (camelCase keys,
as sent by the client) and returns the column values for the matching model,
raising ``ValidationError`` with a one-line message on the first bad field.
"""

import re
from models import EMPLOYMENT_TYPES
from .dates import parse_date_text, build_duration


URL_REGEX = re.compile(r'^(https?://)([\w-]+(\.[\w-]+)+)(:[0-9]{1,5})?(/[^\s]*)?$', re.I)
EMAIL_REGEX = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_REGEX = re.compile(r'^[\d+\-\s()]{7,20}$')
URL_MAX_LENGTH = 500

TRUE_VALUES = {'true', '1', 'yes', 'on'}
FALSE_VALUES = {'false', '0', 'no', 'off', ''}


class ValidationError(ValueError):
    """Raised when a payload fails record validation"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


# ---------------------- Field helpers ----------------------

def clean_str(value):
    """Trim strings; blank strings and None become None"""
    if value is None:
        return None
    if not isinstance(value, str):
        if isinstance(value, (dict, list)):
            return None
        value = str(value)
    value = value.strip()
    return value or None


def collapse_whitespace(value):
    value = clean_str(value)
    return re.sub(r'\s+', ' ', value) if value else value


def unique_list(value):
    """Trimmed, de-duplicated, order-preserving list of strings"""
    if not isinstance(value, list):
        return []
    items = (str(item).strip() for item in value if item is not None)
    return list(dict.fromkeys(text for text in items if text))


def split_list(value):
    """Accept a list or a comma/newline separated string"""
    if isinstance(value, str):
        return unique_list(re.split(r'[,\n]', value))
    return unique_list(value)


def slugify(text):
    slug = re.sub(r'[^a-z0-9]+', '-', str(text or '').lower().strip())
    return slug.strip('-')


def to_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f"Invalid boolean value: {value}")


def check_length(field, value, max_length=None, min_length=None):
    if value is None:
        return value
    if min_length is not None and len(value) < min_length:
        raise ValidationError(f"{field} must be at least {min_length} characters", field)
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field)
    return value


def check_url(field, value):
    value = check_length(field, clean_str(value), URL_MAX_LENGTH)
    if value and not URL_REGEX.match(value):
        raise ValidationError(f"Invalid URL for {field}", field)
    return value


def check_enum(field, value, allowed):
    value = clean_str(value)
    if value is None:
        return None
    value = value.lower()
    if value not in allowed:
        raise ValidationError(f"Invalid {field}: must be one of {', '.join(allowed)}", field)
    return value


def parse_date_field(field, value):
    """Explicit date fields must parse when present"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    parsed = parse_date_text(value)
    if parsed is None:
        raise ValidationError(f"Invalid date for {field}", field)
    return parsed


def _urls(payload, fields):
    return {column: check_url(key, payload.get(key)) for key, column in fields.items()}


def _require(payload, key, message):
    value = clean_str(payload.get(key))
    if not value:
        raise ValidationError(message, key)
    return value


# ---------------------- Record normalizers ----------------------

def normalize_project(payload):
    name = check_length('name', _require(payload, 'name', 'Project name is required'), 160)
    date_text = check_length('dateText', clean_str(payload.get('dateText')), 120)
    date = parse_date_field('date', payload.get('date'))
    if date is None and date_text:
        date = parse_date_text(date_text)

    tech = split_list(payload.get('tech'))
    tags = unique_list(payload.get('tags'))
    if not tags and tech:
        tags = list(tech)

    slug = check_length('slug', clean_str(payload.get('slug')), 120) or slugify(name)[:120] or None

    values = {
        'name': name,
        'slug': slug,
        'description': check_length('description', clean_str(payload.get('description')), 4000),
        'date': date,
        'date_text': date_text,
        'tech': tech,
        'tags': tags,
    }
    values.update(_urls(payload, {
        'image': 'image', 'link': 'link', 'url': 'url', 'demo': 'demo',
        'github': 'github', 'repo': 'repo', 'source': 'source',
    }))
    return values


def normalize_experience(payload, now=None):
    role = _require(payload, 'role', 'Role and company are required')
    company = _require(payload, 'company', 'Role and company are required')

    current = to_bool(payload.get('current'))
    start_text = check_length('startText', clean_str(payload.get('startText')), 60)
    end_text = check_length('endText', clean_str(payload.get('endText')), 60)
    start_date = parse_date_field('startDate', payload.get('startDate'))
    end_date = None if current else parse_date_field('endDate', payload.get('endDate'))

    if start_date is None and start_text:
        start_date = parse_date_text(start_text)
    if not current and end_date is None and end_text and end_text.lower() != 'present':
        end_date = parse_date_text(end_text)

    duration = check_length('duration', clean_str(payload.get('duration')), 120)
    if not duration and start_date:
        duration = build_duration(start_date, end_date, current, now=now)

    values = {
        'role': check_length('role', role, 140),
        'company': check_length('company', company, 140),
        'type': check_enum('type', payload.get('type'), EMPLOYMENT_TYPES),
        'employment_type': check_enum('employmentType', payload.get('employmentType'), EMPLOYMENT_TYPES),
        'location': check_length('location', clean_str(payload.get('location')), 160),
        'start_date': start_date,
        'end_date': end_date,
        'current': current,
        'start_text': start_text,
        'end_text': end_text,
        'duration': duration,
        'description': check_length('description', clean_str(payload.get('description')), 4000),
        'bullets': unique_list(payload.get('bullets')),
        'tags': unique_list(payload.get('tags')),
        'tech': unique_list(payload.get('tech')),
        'skills': unique_list(payload.get('skills')),
    }
    values.update(_urls(payload, {
        'link': 'link', 'url': 'url', 'companyUrl': 'company_url',
        'certificate': 'certificate', 'logo': 'logo', 'image': 'image',
    }))
    return values


def normalize_achievement(payload):
    title = check_length('title', _require(payload, 'title', 'Title is required'), 180)
    date_text = check_length('dateText', clean_str(payload.get('dateText')), 120)
    date = parse_date_field('date', payload.get('date'))
    if date is None and date_text:
        date = parse_date_text(date_text)

    values = {
        'title': title,
        'description': check_length('description', clean_str(payload.get('description')), 2000),
        'date': date,
        'date_text': date_text,
        'category': check_length('category', clean_str(payload.get('category')), 60),
        'tags': unique_list(payload.get('tags')),
    }
    values.update(_urls(payload, {
        'link': 'link', 'certificate': 'certificate', 'url': 'url', 'image': 'image',
    }))
    return values


def normalize_contact(payload, meta=None):
    """Validate a contact submission.

    The three required fields are checked first, in the order the contact
    form shows them, so the client always gets the message for the first
    field the visitor needs to fix.
    """
    name = collapse_whitespace(payload.get('name'))
    email = clean_str(payload.get('email'))
    message = clean_str(payload.get('message'))

    if not name or len(name) < 2:
        raise ValidationError('Name must be at least 2 characters', 'name')
    if not email or not EMAIL_REGEX.match(email):
        raise ValidationError('Please provide a valid email', 'email')
    if not message or len(message) < 10:
        raise ValidationError('Message must be at least 10 characters', 'message')

    phone = clean_str(payload.get('phone'))
    if phone and not PHONE_REGEX.match(phone):
        raise ValidationError('Invalid phone number', 'phone')

    meta = meta or {}
    return {
        'name': check_length('name', name, 120),
        'email': email.lower(),
        'message': check_length('message', message, 5000),
        'subject': check_length('subject', clean_str(payload.get('subject')), 200),
        'phone': phone,
        'status': 'new',
        'meta_ip': clean_str(meta.get('ip')),
        'meta_user_agent': (clean_str(meta.get('userAgent')) or '')[:500] or None,
        'meta_page': (clean_str(meta.get('page')) or '')[:500] or None,
    }


__all__ = [
    'ValidationError',
    'URL_REGEX',
    'EMAIL_REGEX',
    'PHONE_REGEX',
    'clean_str',
    'unique_list',
    'split_list',
    'slugify',
    'to_bool',
    'normalize_project',
    'normalize_experience',
    'normalize_achievement',
    'normalize_contact'
]
