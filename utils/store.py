"""
Store Module - Database access for submissions and portfolio content

Every write is its own unit of work: one commit per insert/update, rolled back
and re-raised as PersistenceError on failure.
"""

from functools import wraps
from flask import current_app
from sqlalchemy import func, distinct
from sqlalchemy.exc import SQLAlchemyError
from models import CONTACT_STATUSES, ContactMessage, Testimonial, Project, Skill, VisitorLog
from .errors import InvalidStatusError, PersistenceError


def _atomic(action):
    """Wrap a store method so database failures roll back and surface as PersistenceError"""
    def decorator(f):
        @wraps(f)
        def decorated_function(self, *args, **kwargs):
            try:
                return f(self, *args, **kwargs)
            except SQLAlchemyError as e:
                self.session.rollback()
                current_app.logger.error(f"✗ Database error while {action}: {str(e)}")
                raise PersistenceError(f"Could not complete: {action}") from e
        return decorated_function
    return decorator


class SubmissionStore:
    """Store-access capability handed to the submission pipeline and admin routes"""

    def __init__(self, session):
        self.session = session

    # Submissions

    @_atomic('saving contact message')
    def add_contact_message(self, fields):
        message = ContactMessage(
            name=fields['name'],
            email=fields['email'],
            subject=fields['subject'],
            message=fields['message'],
            status='pending',
        )
        self.session.add(message)
        self.session.commit()
        return message

    @_atomic('saving testimonial')
    def add_testimonial(self, fields):
        # Approval is an administrative action, never part of creation
        testimonial = Testimonial(
            name=fields['name'],
            email=fields['email'],
            message=fields['message'],
            is_approved=False,
        )
        self.session.add(testimonial)
        self.session.commit()
        return testimonial

    @_atomic('listing contact messages')
    def list_contact_messages(self):
        return (self.session.query(ContactMessage)
                .order_by(ContactMessage.date_created.desc())
                .all())

    @_atomic('listing testimonials')
    def list_testimonials(self, approved_only=False):
        query = self.session.query(Testimonial)
        if approved_only:
            query = query.filter(Testimonial.is_approved.is_(True))
        return query.order_by(Testimonial.date_created.desc()).all()

    @_atomic('loading contact message')
    def get_contact_message(self, message_id):
        return self.session.get(ContactMessage, message_id)

    @_atomic('loading testimonial')
    def get_testimonial(self, testimonial_id):
        return self.session.get(Testimonial, testimonial_id)

    # Administrative state changes

    @staticmethod
    def check_status_transition(current, new):
        """pending -> read -> replied -> archived; forward or same state only"""
        if new not in CONTACT_STATUSES:
            raise InvalidStatusError(
                f"Invalid status '{new}'. Use one of: {', '.join(CONTACT_STATUSES)}")
        if CONTACT_STATUSES.index(new) < CONTACT_STATUSES.index(current):
            raise InvalidStatusError(f"Cannot move a message from '{current}' back to '{new}'")

    @_atomic('updating contact message status')
    def update_contact_status(self, message_id, status):
        message = self.session.get(ContactMessage, message_id)
        if message is None:
            return None
        self.check_status_transition(message.status, status)
        message.status = status
        self.session.commit()
        return message

    @_atomic('updating testimonial approval')
    def set_testimonial_approval(self, testimonial_id, approved):
        testimonial = self.session.get(Testimonial, testimonial_id)
        if testimonial is None:
            return None
        testimonial.is_approved = bool(approved)
        self.session.commit()
        return testimonial

    # Portfolio content

    @_atomic('saving project')
    def add_project(self, fields):
        project = Project(**fields)
        self.session.add(project)
        self.session.commit()
        return project

    @_atomic('listing projects')
    def list_projects(self):
        return self.session.query(Project).order_by(Project.created_at.desc()).all()

    @_atomic('saving skill')
    def add_skill(self, fields):
        skill = Skill(**fields)
        self.session.add(skill)
        self.session.commit()
        return skill

    @_atomic('listing skills')
    def list_skills(self):
        return self.session.query(Skill).order_by(Skill.level.desc()).all()

    # Visitor analytics

    @_atomic('logging visit')
    def log_visit(self, ip_address, user_agent, page):
        self.session.add(VisitorLog(
            ip_address=(ip_address or 'unknown')[:45],
            user_agent=user_agent,
            page_visited=(page or '')[:200],
        ))
        self.session.commit()

    @_atomic('computing visitor statistics')
    def visitor_stats(self):
        total = self.session.query(func.count(VisitorLog.id)).scalar() or 0
        unique = self.session.query(func.count(distinct(VisitorLog.ip_address))).scalar() or 0
        count = func.count(VisitorLog.id).label('count')
        rows = (self.session.query(VisitorLog.page_visited, count)
                .group_by(VisitorLog.page_visited)
                .order_by(count.desc())
                .all())
        return {
            'totalVisitors': total,
            'uniqueVisitors': unique,
            'pageViews': [{'page_visited': page, 'count': n} for page, n in rows],
        }


def get_store():
    """Store bound to the current application"""
    return current_app.extensions['submission_store']


__all__ = ['SubmissionStore', 'get_store']
