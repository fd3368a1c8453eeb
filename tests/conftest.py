"""Shared pytest fixtures for the API tests."""

import pytest

from app import create_app
from extensions import db
from utils.security import reset_rate_limits


@pytest.fixture
def app():
    """Fresh application with its own in-memory database per test."""
    application = create_app('testing')
    reset_rate_limits()
    yield application
    with application.app_context():
        db.session.remove()
        db.drop_all()
    reset_rate_limits()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mail_enabled(app):
    """Turn on the SMTP relay with dummy credentials."""
    app.config.update(
        SKIP_EMAIL=False,
        EMAIL_USER='owner@example.com',
        EMAIL_PASS='app-password',
        EMAIL_TO='inbox@example.com',
        SMTP_HOST='smtp.example.com',
        SMTP_PORT=465,
    )
    return app


class FakeSMTP:
    """Stands in for smtplib.SMTP / SMTP_SSL and records what was sent."""

    instances = []
    fail_on_send = False

    def __init__(self, host, port, timeout=None, context=None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        self.started_tls = True

    def login(self, user, password):
        self.logged_in = (user, password)

    def send_message(self, msg):
        if FakeSMTP.fail_on_send:
            raise OSError('connection reset by peer')
        self.sent.append(msg)


@pytest.fixture
def fake_smtp(monkeypatch):
    import utils.notifications as notifications
    FakeSMTP.instances = []
    FakeSMTP.fail_on_send = False
    monkeypatch.setattr(notifications.smtplib, 'SMTP_SSL', FakeSMTP)
    monkeypatch.setattr(notifications.smtplib, 'SMTP', FakeSMTP)
    return FakeSMTP
