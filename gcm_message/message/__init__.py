"""
GCM message document builder.

- Message: fluent builder and serializer
- MessageOptions: typed delivery options merged over the defaults
- Recipients: single (token or topic) or multiple addressing
"""

from gcm_message.message.builder import Message
from gcm_message.message.models import (
    InvalidRecipientError,
    MessageOptions,
    RecipientKind,
    Recipients,
)

__all__ = [
    "Message",
    "MessageOptions",
    "Recipients",
    "RecipientKind",
    "InvalidRecipientError",
]
