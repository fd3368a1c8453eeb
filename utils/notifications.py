"""
Notifications Module - Contact email relay and owner Telegram alerts

Both channels are best effort: failures are logged and reported as a status,
never raised to the request handler.
"""

import smtplib
import ssl
import threading
import requests
from email.mime.text import MIMEText
from flask import current_app


MAIL_SENT = 'sent'
MAIL_FAILED = 'failed'
MAIL_SKIPPED = 'skipped'


def get_email_config():
    """Load contact relay settings from the app config"""
    cfg = current_app.config
    user = cfg.get('EMAIL_USER')
    return {
        'skip': bool(cfg.get('SKIP_EMAIL')),
        'user': user,
        'password': cfg.get('EMAIL_PASS'),
        'recipient': cfg.get('EMAIL_TO') or user,
        'host': cfg.get('SMTP_HOST') or 'smtp.gmail.com',
        'port': int(cfg.get('SMTP_PORT') or 465),
        'timeout': cfg.get('SMTP_TIMEOUT', 10),
    }


def build_contact_body(contact):
    lines = [
        f"Name: {contact.name}",
        f"Email: {contact.email}",
        f"Phone: {contact.phone}" if contact.phone else None,
        f"Subject: {contact.subject}" if contact.subject else None,
        "",
        contact.message,
    ]
    return '\n'.join(line for line in lines if line is not None)


def build_contact_email(contact, sender, recipient):
    msg = MIMEText(build_contact_body(contact), 'plain', 'utf-8')
    msg['Subject'] = f"New Contact Message from {contact.name}"
    # Must be the authenticated account; replies go to the visitor
    msg['From'] = sender
    msg['To'] = recipient
    msg['Reply-To'] = contact.email
    return msg


def send_contact_email(contact):
    """
    Relay a saved contact message to the site owner by SMTP

    Port 465 uses implicit TLS, any other port upgrades with STARTTLS.

    Args:
        contact (Contact): The persisted contact record

    Returns:
        str: 'sent', 'failed' or 'skipped'
    """
    smtp_cfg = get_email_config()
    if smtp_cfg['skip'] or not (smtp_cfg['user'] and smtp_cfg['password']):
        current_app.logger.debug("Contact email skipped: relay disabled or not configured")
        return MAIL_SKIPPED

    try:
        msg = build_contact_email(contact, smtp_cfg['user'], smtp_cfg['recipient'])
        if smtp_cfg['port'] == 465:
            server = smtplib.SMTP_SSL(smtp_cfg['host'], smtp_cfg['port'],
                                      timeout=smtp_cfg['timeout'],
                                      context=ssl.create_default_context())
        else:
            server = smtplib.SMTP(smtp_cfg['host'], smtp_cfg['port'],
                                  timeout=smtp_cfg['timeout'])
        with server:
            if smtp_cfg['port'] != 465:
                server.starttls(context=ssl.create_default_context())
            server.login(smtp_cfg['user'], smtp_cfg['password'])
            server.send_message(msg)

        current_app.logger.info(f"Contact email sent to {smtp_cfg['recipient']} for message {contact.id}")
        return MAIL_SENT
    except Exception as e:
        current_app.logger.error(f"Email send failed for message {contact.id}: {str(e)}")
        return MAIL_FAILED


def get_telegram_credentials():
    """
    Returns:
        tuple: (bot_token, chat_id) or (None, None) if not configured
    """
    token = current_app.config.get('TELEGRAM_BOT_TOKEN')
    chat_id = current_app.config.get('TELEGRAM_CHAT_ID')
    if token and chat_id:
        return token, chat_id
    return None, None


def send_telegram_notification(message_text):
    """Send a Telegram message to the site owner; returns True on success"""
    bot_token, chat_id = get_telegram_credentials()
    if not (bot_token and chat_id):
        current_app.logger.debug("Telegram credentials not configured")
        return False

    try:
        url = f"https://api.telegram.org/bot{bot_token}/sendMessage"
        payload = {
            'chat_id': chat_id,
            'text': message_text,
            'parse_mode': 'HTML'
        }
        response = requests.post(url, json=payload, timeout=10)
        if response.status_code == 200:
            current_app.logger.info("Telegram notification sent")
            return True
        current_app.logger.error(f"Telegram API error: {response.status_code}")
        return False
    except requests.RequestException as e:
        current_app.logger.error(f"Telegram notification error: {str(e)}")
        return False


def format_contact_alert(contact):
    from markupsafe import escape
    preview = contact.message[:200] + ('...' if len(contact.message) > 200 else '')
    return (
        f"📧 <b>New Portfolio Message</b>\n\n"
        f"👤 <b>From:</b> {escape(contact.name)}\n"
        f"📧 <b>Email:</b> {escape(contact.email)}\n"
        f"💬 <b>Message:</b>\n{escape(preview)}"
    )


def notify_owner_async(contact):
    """Fire the Telegram alert on a daemon thread so the response isn't held up"""
    bot_token, chat_id = get_telegram_credentials()
    if not (bot_token and chat_id):
        return None

    app = current_app._get_current_object()
    text = format_contact_alert(contact)

    def _send():
        with app.app_context():
            send_telegram_notification(text)

    thread = threading.Thread(target=_send)
    thread.daemon = True
    thread.start()
    return thread


__all__ = [
    'MAIL_SENT',
    'MAIL_FAILED',
    'MAIL_SKIPPED',
    'send_contact_email',
    'send_telegram_notification',
    'notify_owner_async'
]
