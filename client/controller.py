"""
Submission controller - the form logic of the contact and testimonial forms.

Collects the draft, validates it with the shared rules, submits it once and
falls back to local storage when the server does not confirm it.
"""

import time
import logging
from collections import namedtuple
from datetime import datetime, timezone
from config import ClientConfig
from utils.errors import TransportError
from utils.validation import required_fields, validate_submission
from .api import PortfolioApi
from .fallback import LocalFallbackStore


logger = logging.getLogger(__name__)

BUTTON_LABELS = {
    'contact': ('Send Message', 'Sending...'),
    'testimonial': ('Submit Testimonial', 'Submitting...'),
}

NOTICES = {
    'contact': {
        'sent': "Message sent successfully! I'll get back to you soon.",
        'saved_locally': ('Your message could not reach the server and has been saved locally. '
                          'It will be sent when the connection is back.'),
    },
    'testimonial': {
        'sent': 'Thank you for your feedback! Your testimonial has been submitted.',
        'saved_locally': 'Thank you for your feedback! Your testimonial has been saved locally.',
    },
}

SAVE_FAILED_NOTICE = 'Sorry, your submission could not be sent or saved. Please try again.'

Banner = namedtuple('Banner', ['level', 'text', 'shown_at'])
SubmitOutcome = namedtuple('SubmitOutcome', ['status', 'errors', 'record'])


class FormState:
    """What the form shows: field values, inline errors, submit button and banner"""

    def __init__(self, kind):
        self.kind = kind
        self.fields = {field: '' for field in required_fields(kind)}
        self.errors = {}
        self.submitting = False
        self.button_label = BUTTON_LABELS[kind][0]
        self.banner = None

    @property
    def submit_enabled(self):
        return not self.submitting


class SubmissionController:

    def __init__(self, kind, api, fallback, on_refresh=None, clock=time.monotonic,
                 banner_timeout=ClientConfig.BANNER_TIMEOUT):
        if kind not in BUTTON_LABELS:
            raise ValueError(f"Unknown submission kind: {kind}")
        self.kind = kind
        self.api = api
        self.fallback = fallback
        self.on_refresh = on_refresh
        self.clock = clock
        self.banner_timeout = banner_timeout
        self.state = FormState(kind)

    @classmethod
    def from_config(cls, kind, config=ClientConfig, **kwargs):
        api = PortfolioApi(config.API_BASE_URL, timeout=config.REQUEST_TIMEOUT)
        fallback = LocalFallbackStore(config.FALLBACK_PATH)
        kwargs.setdefault('banner_timeout', config.BANNER_TIMEOUT)
        return cls(kind, api, fallback, **kwargs)

    # Form interaction

    def edit(self, field, value):
        if field not in self.state.fields:
            raise KeyError(field)
        self.state.fields[field] = value
        self.state.errors.pop(field, None)
        self.state.banner = None

    def collect(self):
        return {field: (value or '').strip() for field, value in self.state.fields.items()}

    def clear_draft(self):
        self.state.fields = {field: '' for field in self.state.fields}
        self.state.errors = {}

    def _show(self, level, text):
        self.state.banner = Banner(level, text, self.clock())

    def visible_banner(self):
        """The banner, or None once it has been up for the display interval"""
        banner = self.state.banner
        if banner is None or self.clock() - banner.shown_at >= self.banner_timeout:
            return None
        return banner

    # Submission

    def submit(self):
        if self.state.submitting:
            return SubmitOutcome('busy', {}, None)

        draft = self.collect()
        errors = validate_submission(self.kind, draft)
        if errors:
            self.state.errors = errors
            return SubmitOutcome('invalid', errors, None)

        idle_label, busy_label = BUTTON_LABELS[self.kind]
        self.state.submitting = True
        self.state.button_label = busy_label
        try:
            return self._deliver(draft)
        finally:
            self.state.submitting = False
            self.state.button_label = idle_label

    def _deliver(self, draft):
        notices = NOTICES[self.kind]
        try:
            self.api.submit(self.kind, draft)
        except TransportError as e:
            logger.warning("Submitting %s failed, saving locally: %s", self.kind, e)
            try:
                record = self.fallback.append(self.kind, draft)
            except OSError as save_error:
                logger.error("Error saving %s locally: %s", self.kind, save_error)
                self._show('error', SAVE_FAILED_NOTICE)
                return SubmitOutcome('failed', {}, None)
            self._show('success', notices['saved_locally'])
            outcome = SubmitOutcome('saved_locally', {}, record)
        else:
            self._show('success', notices['sent'])
            outcome = SubmitOutcome('sent', {}, None)

        self.clear_draft()
        if self.kind == 'testimonial' and self.on_refresh is not None:
            self.on_refresh()
        return outcome

    # Testimonial list

    def load_testimonials(self):
        """Published testimonials plus this profile's local ones, newest first"""
        try:
            server_rows = self.api.fetch_testimonials()
        except TransportError:
            server_rows = []
        rows = list(server_rows) + self.fallback.entries('testimonial')
        return sorted(rows, key=_created_at, reverse=True)


def _created_at(row):
    value = row.get('date_created')
    try:
        created = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return datetime.min.replace(tzinfo=timezone.utc)
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created
