"""
Document model used by review sessions.

Review sessions only need three things from a document: read the text of a
span, replace a span, and mark a span as highlighted. Editors plug in by
implementing Document; TextDocument is the in-memory implementation used by
the web interface.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Span:
    """A contiguous range [start, end) of a document."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span: [{self.start}, {self.end})")

    def __len__(self):
        return self.end - self.start

    def to_dict(self):
        return {"start": self.start, "end": self.end}


class Document(ABC):
    """Interface a review session uses to read, write and highlight its span."""

    @abstractmethod
    def get_text(self, span: Optional[Span] = None) -> str:
        """Return the whole text, or the text of `span`."""

    @abstractmethod
    def contains(self, span: Span) -> bool:
        """Return True while `span` still lies inside the document."""

    @abstractmethod
    def replace(self, span: Span, text: str) -> None:
        """Replace the content of `span` with `text`."""

    def highlight(self, span: Span) -> None:
        pass

    def unhighlight(self, span: Span) -> None:
        pass


class TextDocument(Document):
    """Plain text kept in memory."""

    def __init__(self, text: str = "", document_id: Optional[str] = None):
        self.document_id = document_id
        self._text = text
        self._highlights: List[Span] = []
        self._lock = threading.Lock()

    @property
    def text(self) -> str:
        return self._text

    @property
    def highlights(self) -> List[Span]:
        return list(self._highlights)

    def get_text(self, span: Optional[Span] = None) -> str:
        if span is None:
            return self._text
        return self._text[span.start:span.end]

    def contains(self, span: Span) -> bool:
        return span.end <= len(self._text)

    def replace(self, span: Span, text: str) -> None:
        with self._lock:
            if not self.contains(span):
                raise ValueError(f"Span [{span.start}, {span.end}) is outside the document")
            self._text = self._text[:span.start] + text + self._text[span.end:]

    def highlight(self, span: Span) -> None:
        with self._lock:
            if span not in self._highlights:
                self._highlights.append(span)

    def unhighlight(self, span: Span) -> None:
        with self._lock:
            if span in self._highlights:
                self._highlights.remove(span)

    def paragraph_at(self, offset: int) -> Span:
        """
        Return the paragraph around `offset`.

        Paragraphs are separated by blank lines. Surrounding whitespace is not
        part of the returned span.
        """
        text = self._text
        offset = max(0, min(offset, len(text)))

        start = text.rfind("\n\n", 0, offset)
        start = 0 if start == -1 else start + 2
        end = text.find("\n\n", offset)
        end = len(text) if end == -1 else end

        while start < end and text[start].isspace():
            start += 1
        while end > start and text[end - 1].isspace():
            end -= 1
        return Span(start, end)

    def to_dict(self):
        return {
            "id": self.document_id,
            "text": self._text,
            "highlights": [span.to_dict() for span in self._highlights],
        }


def resolve_span(
    document: TextDocument,
    selection: Optional[Tuple[int, int]] = None,
    cursor: Optional[int] = None,
) -> Tuple[Span, str]:
    """
    Locate the text a command acts on.

    A non-empty selection wins; otherwise the paragraph around the cursor
    (start of the document when no cursor is given).

    Returns:
        (span, text) tuple
    """
    if selection is not None and selection[0] != selection[1]:
        start, end = sorted(selection)
        span = Span(start, end)
        if not document.contains(span):
            raise ValueError(f"Selection [{start}, {end}) is outside the document")
    else:
        if cursor is None:
            cursor = selection[0] if selection is not None else 0
        span = document.paragraph_at(cursor)
    return span, document.get_text(span)
