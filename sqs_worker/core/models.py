from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Handler receives the message body. Returning False (or raising) leaves the
# message in the queue; None or any other value acknowledges it.
Handler = Callable[[str], Optional[bool]]

@dataclass(frozen=True)
class Message:
    message_id: str
    receipt_handle: str        # only valid for this delivery attempt
    body: str
    attributes: Dict[str, str] = field(default_factory=dict)
    message_attributes: Dict[str, Any] = field(default_factory=dict)

class PollOutcome(str, Enum):
    """What a single poll cycle did."""

    RECEIVE_FAILED = "receive_failed"
    EMPTY = "empty"
    PROCESSED = "processed"
    HANDLER_FAILED = "handler_failed"
    DELETE_FAILED = "delete_failed"
