from extensions import db
from datetime import datetime
from sqlalchemy import false, func
import uuid


CONTACT_STATUSES = ('pending', 'read', 'replied', 'archived')


def _iso(value):
    return value.isoformat() if value else None


class ContactMessage(db.Model):
    __tablename__ = 'contact_messages'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(150), nullable=False)
    subject = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    # Assigned by the database at insert time
    date_created = db.Column(db.DateTime, nullable=False, server_default=func.now())
    status = db.Column(db.Enum(*CONTACT_STATUSES, name='contact_status'),
                       nullable=False, default='pending', server_default='pending')

    __table_args__ = (
        db.Index('idx_contact_messages_created', 'date_created'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'subject': self.subject,
            'message': self.message,
            'date_created': _iso(self.date_created),
            'status': self.status,
        }


class Testimonial(db.Model):
    __tablename__ = 'testimonials'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(150), nullable=False)
    message = db.Column(db.Text, nullable=False)
    date_created = db.Column(db.DateTime, nullable=False, server_default=func.now())
    is_approved = db.Column(db.Boolean, nullable=False, default=False, server_default=false())

    __table_args__ = (
        db.Index('idx_testimonials_created', 'date_created'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'message': self.message,
            'date_created': _iso(self.date_created),
            'is_approved': bool(self.is_approved),
        }


class Project(db.Model):
    __tablename__ = 'projects'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    image_url = db.Column(db.String(500))
    category = db.Column(db.String(50))
    technologies = db.Column(db.Text)  # comma separated
    github_url = db.Column(db.String(500))
    live_url = db.Column(db.String(500))
    stars = db.Column(db.Integer, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'image_url': self.image_url,
            'category': self.category,
            'technologies': self.technologies,
            'github_url': self.github_url,
            'live_url': self.live_url,
            'stars': self.stars or 0,
            'created_at': _iso(self.created_at),
            'updated_at': _iso(self.updated_at),
        }


class Skill(db.Model):
    __tablename__ = 'skills'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    level = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('level >= 0 AND level <= 100', name='ck_skills_level'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'level': self.level,
            'category': self.category,
            'created_at': _iso(self.created_at),
        }


class VisitorLog(db.Model):
    __tablename__ = 'visitors'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    ip_address = db.Column(db.String(45))
    user_agent = db.Column(db.Text)
    page_visited = db.Column(db.String(200))
    visited_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Index for faster queries
    __table_args__ = (
        db.Index('idx_visitors_page_date', 'page_visited', 'visited_at'),
    )
