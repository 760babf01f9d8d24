"""
Review sessions for translation and rephrase results.

A review session goes through pending -> reviewing -> accepted|dismissed.
Only one session is open at a time: opening a new one dismisses the previous
open session first. All transitions happen under the manager's lock, the
provider request itself runs outside of it.
"""

from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from spantrans.deepl.exceptions import TranslationError
from spantrans.document import Document, Span
from spantrans.logger import get_logger

logger = get_logger(__name__)


class SessionState(str, Enum):
    PENDING = "pending"
    REVIEWING = "reviewing"
    ACCEPTED = "accepted"
    DISMISSED = "dismissed"


OPEN_STATES = (SessionState.PENDING, SessionState.REVIEWING)


class SessionError(TranslationError):
    """Raised for transitions the session's current state does not allow."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, code="invalid_session_state", details=details)


@dataclass
class ReviewSession:
    """A single translation or rephrase result under review."""

    document: Document
    span: Span
    source_text: str
    kind: str = "translate"  # translate|rephrase
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    draft_text: str = ""
    state: SessionState = SessionState.PENDING
    error: Optional[str] = None
    created_at: float = field(default_factory=time.time)
    finished_at: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.state in OPEN_STATES

    def to_dict(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "kind": self.kind,
            "span": self.span.to_dict(),
            "source_text": self.source_text,
            "draft_text": self.draft_text,
            "state": self.state.value,
            "error": self.error,
            "created_at": self.created_at,
            "finished_at": self.finished_at,
        }


class SessionManager:
    """Owns the one current review session."""

    def __init__(self):
        self._current: Optional[ReviewSession] = None
        self._lock = threading.Lock()

    @property
    def current(self) -> Optional[ReviewSession]:
        """The most recent session, open or finished."""
        return self._current

    def open(self, document: Document, span: Span, kind: str = "translate") -> ReviewSession:
        """Dismiss any open session, then start a pending one for `span`."""
        with self._lock:
            previous = self._current
            if previous is not None and previous.is_open:
                logger.info(f"Dismissing {previous.state.value} session {previous.session_id} for a new request")
                self._teardown_locked(previous, SessionState.DISMISSED)

            session = ReviewSession(
                document=document,
                span=span,
                source_text=document.get_text(span),
                kind=kind,
            )
            document.highlight(span)
            self._current = session

        logger.debug(f"Session {session.session_id} pending ({kind}, span {span.start}-{span.end})")
        return session

    def deliver(self, session: ReviewSession, text: str) -> bool:
        """
        Hand a result to a pending session.

        Returns:
            False if the session was dismissed or replaced in the meantime;
            the result is dropped in that case.
        """
        with self._lock:
            if session is not self._current or session.state is not SessionState.PENDING:
                logger.info(f"Dropping result for {session.state.value} session {session.session_id}")
                return False
            session.draft_text = text
            session.state = SessionState.REVIEWING

        logger.debug(f"Session {session.session_id} reviewing")
        return True

    def fail(self, session: ReviewSession, error: Exception):
        """Tear down a pending session whose request failed."""
        with self._lock:
            session.error = str(error)
            if session.state is SessionState.PENDING:
                self._teardown_locked(session, SessionState.DISMISSED)
        logger.warning(f"Session {session.session_id} failed: {error}")

    def edit(self, text: str, session: Optional[ReviewSession] = None) -> ReviewSession:
        """Replace the draft text of a reviewing session."""
        with self._lock:
            session = self._resolve_locked(session)
            if session.state is not SessionState.REVIEWING:
                raise SessionError(
                    f"Cannot edit a {session.state.value} session",
                    details={"state": session.state.value},
                )
            session.draft_text = text
        return session

    def accept(self, session: Optional[ReviewSession] = None) -> ReviewSession:
        """Write the draft into the source span and close the session."""
        with self._lock:
            session = self._resolve_locked(session)
            if session.state is not SessionState.REVIEWING:
                raise SessionError(
                    f"Cannot accept a {session.state.value} session",
                    details={"state": session.state.value},
                )
            if session.document.contains(session.span):
                session.document.replace(session.span, session.draft_text)
            else:
                logger.warning(f"Span of session {session.session_id} no longer exists, nothing written")
            self._teardown_locked(session, SessionState.ACCEPTED)

        logger.info(f"Session {session.session_id} accepted")
        return session

    def dismiss(self, session: Optional[ReviewSession] = None) -> ReviewSession:
        """Close the session without touching the document."""
        with self._lock:
            session = self._resolve_locked(session)
            if not session.is_open:
                raise SessionError(
                    f"Cannot dismiss a {session.state.value} session",
                    details={"state": session.state.value},
                )
            self._teardown_locked(session, SessionState.DISMISSED)

        logger.info(f"Session {session.session_id} dismissed")
        return session

    def run(
        self,
        document: Document,
        span: Span,
        action: Callable[[str], str],
        kind: str = "translate",
    ) -> ReviewSession:
        """
        Open a session for `span` and fill it with `action(source_text)`.

        Errors raised by `action` tear the session down and propagate.
        """
        session = self.open(document, span, kind=kind)
        try:
            result = action(session.source_text)
        except Exception as e:
            self.fail(session, e)
            raise
        self.deliver(session, result)
        return session

    def _resolve_locked(self, session: Optional[ReviewSession]) -> ReviewSession:
        if session is None:
            session = self._current
        if session is None:
            raise SessionError("No review session", details={"reason": "no_session"})
        return session

    def _teardown_locked(self, session: ReviewSession, state: SessionState):
        session.document.unhighlight(session.span)
        session.state = state
        session.finished_at = time.time()
