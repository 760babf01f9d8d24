"""
Translation module - Request orchestration and review

This module provides:
- GlossaryResolver: glossary lookup per request
- RequestOrchestrator: translation chains and rephrasing
- SessionManager / ReviewSession: the review workflow
- TranslationService: configuration-driven entry point for callers
"""

from spantrans.translation.glossary import GlossaryResolver
from spantrans.translation.orchestrator import RequestOrchestrator, build_route
from spantrans.translation.session import (
    ReviewSession,
    SessionError,
    SessionManager,
    SessionState,
)
from spantrans.translation.service import TranslationService, validate_deepl_config
