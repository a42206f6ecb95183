"""Build push message documents for the GCM/FCM legacy HTTP send endpoint."""

from gcm_message.message import (
    InvalidRecipientError,
    Message,
    MessageOptions,
    RecipientKind,
    Recipients,
)

__version__ = "1.0.0"

__all__ = [
    "Message",
    "MessageOptions",
    "Recipients",
    "RecipientKind",
    "InvalidRecipientError",
]
