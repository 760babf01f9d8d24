"""Web application package for SpanTrans."""

from flask import Flask

from spantrans.config import initialize_app


def create_app(client=None, detector=None) -> Flask:
    """
    Application factory for the web interface.

    Args:
        client: Optional provider client used instead of one built from settings
        detector: Optional language detector used instead of langdetect
    """
    initialize_app()

    from .app import build_app  # Import here to avoid circular imports

    return build_app(client=client, detector=detector)


__all__ = ["create_app"]
