"""
Client Package - Submission controller for the contact and testimonial forms
"""

from .api import PortfolioApi
from .fallback import LocalFallbackStore, STORAGE_KEYS, REJECTED_KEYS
from .controller import SubmissionController, FormState, Banner, SubmitOutcome
from .sync import replay_fallback, ReplayReport

__all__ = [
    'PortfolioApi',
    'LocalFallbackStore',
    'STORAGE_KEYS',
    'REJECTED_KEYS',
    'SubmissionController',
    'FormState',
    'Banner',
    'SubmitOutcome',
    'replay_fallback',
    'ReplayReport'
]
