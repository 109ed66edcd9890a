"""
Notifications Module - E-mail notification for new contact messages
"""

import smtplib
from html import escape
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.errors import MessageError
from flask import current_app
from .errors import NotificationError


class SmtpNotifier:
    """
    Notification capability backed by an SMTP server.

    Every failure, including a connect or read timeout, is raised as
    NotificationError so callers can decide whether it matters.
    """

    def __init__(self, host, port, username, password, sender=None, recipient=None,
                 timeout=10, use_tls=True):
        self.host = host
        self.port = int(port)
        self.username = username
        self.password = password
        self.sender = sender or username
        self.recipient = recipient or username
        self.timeout = timeout
        self.use_tls = use_tls

    @classmethod
    def from_config(cls, config):
        return cls(
            host=config.get('EMAIL_HOST'),
            port=config.get('EMAIL_PORT', 587),
            username=config.get('EMAIL_USER'),
            password=config.get('EMAIL_PASSWORD'),
            sender=config.get('EMAIL_FROM'),
            recipient=config.get('EMAIL_TO'),
            timeout=config.get('EMAIL_TIMEOUT', 10),
            use_tls=config.get('EMAIL_USE_TLS', True),
        )

    @property
    def is_configured(self):
        return all([self.host, self.port, self.username, self.password, self.recipient])

    def send(self, subject, html_body):
        if not self.is_configured:
            raise NotificationError('SMTP not configured')

        try:
            msg = MIMEMultipart('alternative')
            msg['Subject'] = subject
            msg['From'] = self.sender
            msg['To'] = self.recipient
            msg.attach(MIMEText(html_body, 'html'))

            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, MessageError, ValueError, OSError) as e:
            raise NotificationError(f"Error sending email to {self.recipient}: {str(e)}") from e

        current_app.logger.info(f"Email sent to {self.recipient}: {subject}")

    def notify_contact_message(self, message):
        subject = f"New Contact Form Submission: {message.subject}"
        self.send(subject, render_contact_email(message))


class NullNotifier:
    """Used when notifications are switched off"""

    is_configured = False

    def send(self, subject, html_body):
        current_app.logger.debug(f"Notifications disabled, skipping: {subject}")

    def notify_contact_message(self, message):
        self.send(f"New Contact Form Submission: {message.subject}", '')


def render_contact_email(message):
    """HTML summary of a contact message"""
    return (
        "<h2>New Contact Message</h2>"
        f"<p><strong>Name:</strong> {escape(message.name)}</p>"
        f"<p><strong>Email:</strong> {escape(message.email)}</p>"
        f"<p><strong>Subject:</strong> {escape(message.subject)}</p>"
        "<p><strong>Message:</strong></p>"
        f"<p>{escape(message.message)}</p>"
        "<hr>"
        "<p><em>This message was sent from your portfolio website contact form.</em></p>"
    )


def build_notifier(config):
    if not config.get('NOTIFICATIONS_ENABLED'):
        return NullNotifier()
    return SmtpNotifier.from_config(config)


def get_notifier():
    """Notifier bound to the current application"""
    return current_app.extensions['notifier']


__all__ = ['SmtpNotifier', 'NullNotifier', 'render_contact_email', 'build_notifier', 'get_notifier']
