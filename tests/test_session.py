import threading

import pytest

from spantrans.deepl.exceptions import ServiceUnavailableError
from spantrans.document import Span, TextDocument
from spantrans.translation.session import SessionError, SessionManager, SessionState


@pytest.fixture
def document():
    return TextDocument("Hallo Welt\n\nZweiter Absatz")


def test_open_session_is_pending_and_highlighted(document):
    manager = SessionManager()

    session = manager.open(document, Span(0, 10))

    assert session.state is SessionState.PENDING
    assert session.source_text == "Hallo Welt"
    assert document.highlights == [Span(0, 10)]
    assert manager.current is session


def test_deliver_moves_to_reviewing(document):
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))

    assert manager.deliver(session, "Hello world")
    assert session.state is SessionState.REVIEWING
    assert session.draft_text == "Hello world"


def test_accept_writes_edited_draft(document):
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))
    manager.deliver(session, "Hello world")

    manager.edit("Hello, world!")
    manager.accept()

    assert session.state is SessionState.ACCEPTED
    assert document.text == "Hello, world!\n\nZweiter Absatz"
    assert document.highlights == []


def test_edits_do_not_change_state(document):
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))
    manager.deliver(session, "Hello world")

    manager.edit("one")
    manager.edit("two")

    assert session.state is SessionState.REVIEWING
    assert session.draft_text == "two"
    assert document.text == "Hallo Welt\n\nZweiter Absatz"


def test_dismiss_never_mutates_document(document):
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))
    manager.deliver(session, "Hello world")
    manager.edit("Completely different")

    manager.dismiss()

    assert session.state is SessionState.DISMISSED
    assert document.text == "Hallo Welt\n\nZweiter Absatz"
    assert document.highlights == []


def test_new_session_dismisses_reviewing_session_first(document):
    manager = SessionManager()
    first = manager.open(document, Span(0, 10))
    manager.deliver(first, "Hello world")

    second = manager.open(document, Span(12, 26))

    assert first.state is SessionState.DISMISSED
    assert second.state is SessionState.PENDING
    assert document.text == "Hallo Welt\n\nZweiter Absatz"
    assert document.highlights == [Span(12, 26)]


def test_late_result_for_dismissed_pending_session_is_dropped(document):
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))
    manager.dismiss()

    assert not manager.deliver(session, "Hello world")
    assert session.state is SessionState.DISMISSED
    assert session.draft_text == ""


def test_late_result_for_replaced_session_is_dropped(document):
    manager = SessionManager()
    first = manager.open(document, Span(0, 10))
    second = manager.open(document, Span(12, 26))

    assert not manager.deliver(first, "Hello world")
    assert manager.current is second
    assert second.state is SessionState.PENDING


def test_run_failure_tears_down_pending_session(document):
    manager = SessionManager()

    def failing(text):
        raise ServiceUnavailableError("Try later", status_code=503)

    with pytest.raises(ServiceUnavailableError):
        manager.run(document, Span(0, 10), failing)

    session = manager.current
    assert session.state is SessionState.DISMISSED
    assert "Try later" in session.error
    assert document.highlights == []
    assert document.text == "Hallo Welt\n\nZweiter Absatz"


def test_run_success_reaches_reviewing(document):
    manager = SessionManager()

    session = manager.run(document, Span(0, 10), str.upper)

    assert session.state is SessionState.REVIEWING
    assert session.draft_text == "HALLO WELT"


def test_accept_requires_reviewing_state(document):
    manager = SessionManager()
    manager.open(document, Span(0, 10))

    with pytest.raises(SessionError):
        manager.accept()


def test_edit_requires_reviewing_state(document):
    manager = SessionManager()
    manager.open(document, Span(0, 10))

    with pytest.raises(SessionError):
        manager.edit("too early")


def test_finished_session_cannot_be_dismissed_again(document):
    manager = SessionManager()
    manager.open(document, Span(0, 10))
    manager.dismiss()

    with pytest.raises(SessionError):
        manager.dismiss()


def test_no_session_raises(document):
    with pytest.raises(SessionError) as excinfo:
        SessionManager().accept()

    assert excinfo.value.details["reason"] == "no_session"


def test_accept_with_vanished_span_writes_nothing():
    document = TextDocument("Hallo Welt")
    manager = SessionManager()
    session = manager.open(document, Span(0, 10))
    manager.deliver(session, "Hello world")
    document.replace(Span(0, 10), "Hi")

    manager.accept()

    assert session.state is SessionState.ACCEPTED
    assert document.text == "Hi"


def test_concurrent_opens_leave_one_open_session(document):
    manager = SessionManager()
    sessions = []
    sessions_lock = threading.Lock()

    def open_session():
        session = manager.open(document, Span(0, 10))
        with sessions_lock:
            sessions.append(session)

    threads = [threading.Thread(target=open_session) for _ in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    open_sessions = [session for session in sessions if session.is_open]
    assert open_sessions == [manager.current]
