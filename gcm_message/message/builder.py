"""
GCM message builder.

Accumulates delivery options, custom data and notification content and
renders the JSON document POSTed to the messaging backend's send endpoint.
Sending the document is left to the caller's HTTP client.

Usage:
    message = (
        Message({"title": "Hi"}, {"collapseKey": "updates"})
        .add_data("event_id", "evt-123")
        .time_to_live(3600)
    )
    body = message.build(["token-1", "token-2"])
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from gcm_message.core.logging_config import sanitize_log_value
from gcm_message.message.constants import (
    COLLAPSE_KEY,
    DATA,
    DELAY_WHILE_IDLE,
    DRY_RUN,
    NOTIFICATION,
    REGISTRATION_IDS,
    RESTRICTED_PACKAGE_NAME,
    TIME_TO_LIVE,
)
from gcm_message.message.models import MessageOptions, Recipients

logger = logging.getLogger(__name__)

RecipientsInput = Union[Recipients, str, Sequence[str]]


class Message:
    """
    Fluent builder for a single GCM message document.

    Mutators return the instance for chaining. build() does not finalize the
    message: it can be called repeatedly, including after further mutation.

    Attributes:
        _notification: Display notification fields, fixed at construction
        _data: Custom payload, None until set or added to
        _options: Delivery options merged over the defaults
    """

    def __init__(
        self,
        notification: Optional[Mapping[str, str]] = None,
        options: Union[MessageOptions, Mapping[str, Any], None] = None,
    ):
        """
        Initialize a message.

        Args:
            notification: Notification fields (title, body, icon...)
            options: Delivery options overriding the defaults, see MessageOptions
        """
        self._notification: Dict[str, str] = dict(notification or {})
        self._data: Optional[Dict[str, str]] = None
        self._options = MessageOptions.merge(options)

    def collapse_key(self, collapse_key: str) -> "Message":
        """Sets the collapse key, an empty string removes it."""
        self._options.collapse_key = collapse_key
        return self

    def get_collapse_key(self) -> str:
        return self._options.collapse_key

    def delay_while_idle(self, delay_while_idle: bool) -> "Message":
        """Sets the delay while idle flag (default False)."""
        self._options.delay_while_idle = delay_while_idle
        return self

    def get_delay_while_idle(self) -> bool:
        return self._options.delay_while_idle

    def dry_run(self, dry_run: bool) -> "Message":
        """Sets the dry run flag (default False)."""
        self._options.dry_run = dry_run
        return self

    def get_dry_run(self) -> bool:
        return self._options.dry_run

    def time_to_live(self, time_to_live: int) -> "Message":
        """Sets the time to live, in seconds."""
        self._options.time_to_live = time_to_live
        return self

    def get_time_to_live(self) -> int:
        return self._options.time_to_live

    def add_data(self, key: str, value: str) -> "Message":
        """Adds a key/value pair to the payload data, replacing any previous value."""
        if self._data is None:
            self._data = {}
        self._data[key] = value
        return self

    def data(self, data: Mapping[str, str]) -> "Message":
        """Replaces the payload data."""
        self._data = dict(data)
        return self

    def get_data(self) -> Optional[Dict[str, str]]:
        return self._data

    def restricted_package_name(self, restricted_package_name: str) -> "Message":
        """Sets the restricted package name, an empty string removes it."""
        self._options.restricted_package_name = restricted_package_name
        return self

    def get_restricted_package_name(self) -> str:
        return self._options.restricted_package_name

    def get_notification(self) -> Dict[str, str]:
        return dict(self._notification)

    # Accepted as options but never serialized
    def get_content_available(self) -> bool:
        return self._options.content_available

    def get_priority(self) -> str:
        return self._options.priority

    def to_dict(self, recipients: RecipientsInput) -> Dict[str, Any]:
        """
        Build the message document as a dictionary.

        Key order follows the backend documentation: addressing, collapse key,
        delivery options, restricted package name, data, notification.

        Args:
            recipients: A registration token or topic, a list of tokens, or Recipients

        Returns:
            Dictionary ready for JSON serialization

        Raises:
            InvalidRecipientError: If recipients is empty and strict mode is on
            TypeError: If recipients has an unsupported type
        """
        addressing = Recipients.coerce(recipients)
        message: Dict[str, Any] = addressing.to_wire()

        options = self._options
        if options.collapse_key != "":
            message[COLLAPSE_KEY] = options.collapse_key

        message[DELAY_WHILE_IDLE] = options.delay_while_idle
        message[TIME_TO_LIVE] = options.time_to_live
        message[DRY_RUN] = options.dry_run

        if options.restricted_package_name != "":
            message[RESTRICTED_PACKAGE_NAME] = options.restricted_package_name

        if self._data:
            message[DATA] = dict(self._data)

        if self._notification:
            message[NOTIFICATION] = dict(self._notification)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "GCM message built",
                extra={
                    "addressing": REGISTRATION_IDS if REGISTRATION_IDS in message else "to",
                    "recipient_count": len(addressing.addresses),
                    "topic": (
                        sanitize_log_value(addressing.addresses[0])
                        if addressing.is_topic else None
                    ),
                    "fields": list(message.keys()),
                },
            )

        return message

    def build(self, recipients: RecipientsInput) -> str:
        """
        Build the serialized message document.

        Args:
            recipients: A registration token or topic, a list of tokens, or Recipients

        Returns:
            Compact JSON string, the request body for the send endpoint
        """
        return json.dumps(self.to_dict(recipients), separators=(",", ":"))
