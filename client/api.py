"""
HTTP client for the portfolio API
"""

import logging
import requests
from utils.errors import SubmissionRejected, TransportError


logger = logging.getLogger(__name__)

ENDPOINTS = {
    'contact': '/contact',
    'testimonial': '/testimonials',
}


class PortfolioApi:
    """
    HTTP-client capability used by the submission controller.

    Every way a call can fail (connection error, timeout, non-2xx status,
    undecodable body, or a body that does not report success) is raised as
    TransportError. When the server answered and refused the record (4xx, or
    success other than true) the error is the SubmissionRejected subclass.
    """

    def __init__(self, base_url, session=None, timeout=10):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path):
        return f"{self.base_url}{path}"

    def submit(self, kind, payload):
        """POST one submission; returns the server's JSON body on confirmed success"""
        try:
            path = ENDPOINTS[kind]
        except KeyError:
            raise ValueError(f"Unknown submission kind: {kind}") from None

        try:
            response = self.session.post(self._url(path), json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("Error submitting %s: %s", kind, e)
            raise TransportError(f"Could not reach {path}: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.ok:
            message = body.get('message') if isinstance(body, dict) else None
            error = f"HTTP error! status: {response.status_code} {message or ''}".strip()
            # 4xx means the server refused this record; resending it will not help
            if 400 <= response.status_code < 500:
                raise SubmissionRejected(error, status_code=response.status_code)
            raise TransportError(error)
        if not isinstance(body, dict):
            raise TransportError('Server did not confirm the submission')
        if body.get('success') is not True:
            raise SubmissionRejected(body.get('message') or 'Server did not confirm the submission',
                                     status_code=response.status_code)
        return body

    def fetch_testimonials(self):
        """Approved testimonials as published by the server"""
        try:
            response = self.session.get(self._url('/testimonials'), timeout=self.timeout)
            response.raise_for_status()
            rows = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Failed to fetch testimonials: %s", e)
            raise TransportError(f"Could not load testimonials: {e}") from e

        if not isinstance(rows, list):
            raise TransportError('Unexpected testimonials payload')
        return rows
