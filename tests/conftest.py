"""Pytest fixtures and configuration for test suite

Factory Functions:
    - make_message(**overrides) -> Message

Each factory accepts keyword overrides for the message options.
"""
import json
import pytest

from gcm_message.core.config import settings
from gcm_message.message import Message


# =============================================================================
# Factory Functions for Test Objects
# =============================================================================

def make_message(
    notification=None,
    data=None,
    **options
) -> Message:
    """
    Factory function to create Message instances for testing.

    Args:
        notification: Notification fields. If None, no notification is set.
        data: Payload data. If None, data stays unset.
        **options: Message options by their camelCase names.

    Returns:
        Message instance

    Example:
        message = make_message({"title": "Hi"}, collapseKey="news")
    """
    message = Message(notification, options)
    if data is not None:
        message.data(data)
    return message


def decode(document: str) -> dict:
    """Decode a built message document."""
    return json.loads(document)


# =============================================================================
# Pytest Fixtures
# =============================================================================

@pytest.fixture
def message():
    """Default-constructed message."""
    return make_message()


@pytest.fixture
def notification_message():
    """Message carrying a simple notification."""
    return make_message({"title": "Hi", "body": "Front door"})


@pytest.fixture
def lenient_recipients(monkeypatch):
    """Disable strict recipient checking for the duration of a test."""
    monkeypatch.setattr(settings, "GCM_STRICT_RECIPIENTS", False)
    yield
