"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import rate_limited, json_body
from .validation import ValidationError
from .data import (
    project_to_dict,
    experience_to_dict,
    achievement_to_dict,
    contact_to_dict,
    list_projects,
    get_project,
    create_project,
    delete_project,
    list_experience,
    create_experience,
    list_achievements,
    create_achievement,
    save_contact
)
from .notifications import (
    send_contact_email,
    send_telegram_notification,
    notify_owner_async
)
from .security import (
    get_client_ip,
    check_rate_limit,
    reset_rate_limits,
    apply_security_headers
)
from .seed import seed_data, seed_file

__all__ = [
    # Decorators
    'rate_limited',
    'json_body',

    # Validation
    'ValidationError',

    # Data
    'project_to_dict',
    'experience_to_dict',
    'achievement_to_dict',
    'contact_to_dict',
    'list_projects',
    'get_project',
    'create_project',
    'delete_project',
    'list_experience',
    'create_experience',
    'list_achievements',
    'create_achievement',
    'save_contact',

    # Notifications
    'send_contact_email',
    'send_telegram_notification',
    'notify_owner_async',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits',
    'apply_security_headers',

    # Seeding
    'seed_data',
    'seed_file'
]
