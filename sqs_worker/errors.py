class QueueError(Exception):
    """Base class for queue transport failures."""

class SessionError(QueueError):
    """Could not build an SQS client (bad region, endpoint, ...). Fatal for the worker."""

class ReceiveError(QueueError):
    """Receive call failed. The polling loop logs it and waits for the next cycle."""

class DeleteError(QueueError):
    """Delete call failed. The message stays in the queue and will be redelivered."""

class SendError(QueueError):
    """Send call failed. Surfaced to the caller."""
