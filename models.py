from extensions import db
from datetime import datetime
from sqlalchemy import JSON
import uuid

# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


EMPLOYMENT_TYPES = (
    'full-time',
    'part-time',
    'internship',
    'freelance',
    'contract',
    'temporary',
    'volunteer',
    'self-employed',
    'apprenticeship',
)

CONTACT_STATUSES = ('new', 'read', 'replied', 'archived')


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(160), nullable=False)
    slug = db.Column(db.String(120), unique=True, index=True)  # NULLs don't collide
    description = db.Column(db.Text)
    # Sort key; date_text keeps the human input (e.g. "Aug 2024")
    date = db.Column(db.DateTime, index=True)
    date_text = db.Column(db.String(120))
    tech = db.Column(SafeJSON, default=[])
    tags = db.Column(SafeJSON, default=[])
    image = db.Column(db.String(500))
    # Live links (client checks link | url | demo)
    link = db.Column(db.String(500))
    url = db.Column(db.String(500))
    demo = db.Column(db.String(500))
    # Code links (client checks github | repo | source)
    github = db.Column(db.String(500))
    repo = db.Column(db.String(500))
    source = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Experience(db.Model):
    __tablename__ = 'experiences'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    role = db.Column(db.String(140), nullable=False)
    company = db.Column(db.String(140), nullable=False, index=True)
    # Client reads either type or employment_type
    type = db.Column(db.String(30))
    employment_type = db.Column(db.String(30))
    location = db.Column(db.String(160))
    start_date = db.Column(db.DateTime)
    end_date = db.Column(db.DateTime)
    current = db.Column(db.Boolean, default=False)
    start_text = db.Column(db.String(60))
    end_text = db.Column(db.String(60))
    duration = db.Column(db.String(120))
    description = db.Column(db.Text)
    bullets = db.Column(SafeJSON, default=[])
    tags = db.Column(SafeJSON, default=[])
    tech = db.Column(SafeJSON, default=[])
    skills = db.Column(SafeJSON, default=[])
    link = db.Column(db.String(500))
    url = db.Column(db.String(500))
    company_url = db.Column(db.String(500))
    certificate = db.Column(db.String(500))
    logo = db.Column(db.String(500))
    image = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.Index('idx_experience_dates', 'start_date', 'end_date'),
    )


class Achievement(db.Model):
    __tablename__ = 'achievements'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(180), nullable=False)
    description = db.Column(db.Text)
    date = db.Column(db.DateTime, index=True)
    date_text = db.Column(db.String(120))
    category = db.Column(db.String(60), index=True)  # Badge shown on the card
    tags = db.Column(SafeJSON, default=[])
    link = db.Column(db.String(500))
    certificate = db.Column(db.String(500))
    url = db.Column(db.String(500))
    image = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Contact(db.Model):
    __tablename__ = 'contacts'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False, index=True)
    message = db.Column(db.Text, nullable=False)
    subject = db.Column(db.String(200))
    phone = db.Column(db.String(20))
    status = db.Column(db.String(20), default='new', index=True)  # new, read, replied, archived
    # Request metadata captured by the contact route
    meta_ip = db.Column(db.String(45))
    meta_user_agent = db.Column(db.String(500))
    meta_page = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "status IN (" + ", ".join(f"'{s}'" for s in CONTACT_STATUSES) + ")",
            name='ck_contact_status'),
    )
