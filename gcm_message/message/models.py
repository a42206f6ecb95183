"""
Models for the GCM message builder.

MessageOptions is the typed option set merged over the defaults at
construction time. Recipients is the addressing variant passed to build().
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from gcm_message.core.config import settings
from gcm_message.message.constants import (
    DEFAULT_COLLAPSE_KEY,
    DEFAULT_CONTENT_AVAILABLE,
    DEFAULT_DELAY_WHILE_IDLE,
    DEFAULT_DRY_RUN,
    DEFAULT_RESTRICTED_PACKAGE_NAME,
    REGISTRATION_IDS,
    TO,
)

logger = logging.getLogger(__name__)


class InvalidRecipientError(ValueError):
    """Raised when a recipient list is empty or a recipient string is blank."""


class MessageOptions(BaseModel):
    """Delivery options of a message.

    Options are accepted under their camelCase names (``collapseKey``,
    ``timeToLive``...) as well as the snake_case field names. Unknown keys
    are ignored.

    Attributes:
        collapse_key: Collapse key, empty string means no collapse key
        time_to_live: Seconds the backend keeps the message while the device is offline
        delay_while_idle: Hold the message until the device becomes active
        restricted_package_name: Only deliver to this application package, empty means any
        dry_run: Validate the request without delivering it
        content_available: Accepted for compatibility, never serialized
        priority: Accepted for compatibility, never serialized
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    collapse_key: str = Field(default=DEFAULT_COLLAPSE_KEY, alias="collapseKey")
    time_to_live: int = Field(
        default_factory=lambda: settings.GCM_DEFAULT_TIME_TO_LIVE,
        alias="timeToLive",
    )
    delay_while_idle: bool = Field(default=DEFAULT_DELAY_WHILE_IDLE, alias="delayWhileIdle")
    restricted_package_name: str = Field(
        default=DEFAULT_RESTRICTED_PACKAGE_NAME,
        alias="restrictedPackageName",
    )
    dry_run: bool = Field(default=DEFAULT_DRY_RUN, alias="dryRun")
    content_available: bool = Field(default=DEFAULT_CONTENT_AVAILABLE, alias="contentAvailable")
    priority: str = Field(default_factory=lambda: settings.GCM_DEFAULT_PRIORITY)

    @classmethod
    def merge(
        cls,
        options: Union["MessageOptions", Mapping[str, Any], None] = None,
    ) -> "MessageOptions":
        """Merge caller options over the defaults.

        Any recognised key present in ``options`` replaces its default,
        absent keys keep the default.

        Args:
            options: Option mapping, an existing MessageOptions, or None

        Returns:
            A new MessageOptions instance
        """
        if options is None:
            return cls()
        if isinstance(options, MessageOptions):
            return options.model_copy()

        known = _known_option_keys()
        unknown = [key for key in options if key not in known]
        if unknown:
            logger.debug(
                "Ignoring unrecognized message options",
                extra={"unknown_options": sorted(str(key) for key in unknown)},
            )

        return cls.model_validate(dict(options))


def _known_option_keys() -> set:
    keys = set()
    for name, info in MessageOptions.model_fields.items():
        keys.add(name)
        if info.alias:
            keys.add(info.alias)
    return keys


class RecipientKind(str, Enum):
    """Addressing variant of a message."""

    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class Recipients:
    """Who a message is addressed to.

    A SINGLE recipient is a registration token or a topic such as
    ``/topics/news``. MULTIPLE holds a list of registration tokens; a list of
    exactly one is rendered like a single recipient.
    """

    kind: RecipientKind
    addresses: Tuple[str, ...]

    @classmethod
    def single(cls, address: str) -> "Recipients":
        return cls(RecipientKind.SINGLE, (address,))

    @classmethod
    def multiple(cls, addresses: Sequence[str]) -> "Recipients":
        return cls(RecipientKind.MULTIPLE, tuple(addresses))

    @classmethod
    def coerce(
        cls,
        value: Union["Recipients", str, Sequence[str]],
        strict: Optional[bool] = None,
    ) -> "Recipients":
        """Turn a build() argument into a Recipients value.

        Args:
            value: A Recipients, a single address string, or a list/tuple of addresses
            strict: Reject empty lists and blank addresses
                (default from settings.GCM_STRICT_RECIPIENTS)

        Returns:
            Recipients variant

        Raises:
            InvalidRecipientError: In strict mode, on an empty list or blank address
            TypeError: If value is not a string, list/tuple of strings or Recipients
        """
        if strict is None:
            strict = settings.GCM_STRICT_RECIPIENTS

        if isinstance(value, Recipients):
            recipients = value
        elif isinstance(value, str):
            recipients = cls.single(value)
        elif isinstance(value, (list, tuple)):
            for address in value:
                if not isinstance(address, str):
                    raise TypeError(
                        f"Recipient addresses must be strings, got {type(address).__name__}"
                    )
            recipients = cls.multiple(value)
        else:
            raise TypeError(
                "Recipients must be a string, a list of strings or Recipients, "
                f"got {type(value).__name__}"
            )

        if strict:
            recipients.validate()
        return recipients

    def validate(self) -> None:
        """Reject empty recipient lists and blank addresses.

        Raises:
            InvalidRecipientError: If there is nothing to address
        """
        if not self.addresses:
            raise InvalidRecipientError("Recipient list is empty")
        for index, address in enumerate(self.addresses):
            if not address.strip():
                raise InvalidRecipientError(f"Recipient at position {index} is empty")

    @property
    def is_topic(self) -> bool:
        return (
            len(self.addresses) == 1
            and self.addresses[0].startswith("/topics/")
        )

    def to_wire(self) -> Dict[str, Any]:
        """Addressing fragment of the message document.

        Returns:
            ``{"to": address}`` for a single recipient or a list of one,
            ``{"registration_ids": [...]}`` otherwise
        """
        if self.kind == RecipientKind.SINGLE:
            return {TO: self.addresses[0]}
        if len(self.addresses) == 1:
            return {TO: self.addresses[0]}
        return {REGISTRATION_IDS: list(self.addresses)}
