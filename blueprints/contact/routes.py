"""
Contact Routes - Public contact form processing
"""

from flask import jsonify, request, current_app
from utils.data import save_contact
from utils.decorators import rate_limited, json_body
from utils.notifications import send_contact_email, notify_owner_async
from utils.security import get_client_ip
from . import contact_bp


@contact_bp.route('', methods=['POST'])
@rate_limited('contact', 'RATELIMIT_CONTACT')
@json_body
def submit(payload):
    """Validate, save, then relay by email.

    The record is committed before the email attempt, and the email outcome
    only changes the ``mail`` flag in the response: "sent", "failed" or
    "skipped".
    """
    contact = save_contact(payload, meta={
        'ip': get_client_ip(),
        'userAgent': request.headers.get('User-Agent'),
        'page': request.referrer,
    })

    mail_status = send_contact_email(contact)
    current_app.logger.info(f"Contact message {contact.id} mail status: {mail_status}")

    notify_owner_async(contact)

    return jsonify({
        'message': 'Message received',
        'mail': mail_status
    }), 200
