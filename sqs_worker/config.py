from dataclasses import dataclass
from typing import Optional

from sqs_worker.core.models import Handler

# SQS service limits
MAX_WAIT_SECONDS = 20
MAX_VISIBILITY_TIMEOUT_SECONDS = 43200
MAX_DELAY_SECONDS = 900

@dataclass(frozen=True)
class WorkerConfig:
    queue_url: str
    region: str
    handler: Handler

    poll_interval_seconds: float = 5.0
    wait_seconds: int = 1                  # receive long-poll wait
    visibility_timeout_seconds: int = 30   # keep above expected handler latency
    send_delay_seconds: int = 1            # delivery delay for send_message
    endpoint_url: Optional[str] = None     # e.g. LocalStack

    # Shutdown behavior:
    # > 0: Exit after N consecutive empty polls - for batch runs
    # <= 0: Run until stopped (daemon mode)
    shutdown_after_empty_polls: int = 0

    def __post_init__(self) -> None:
        if not self.queue_url:
            raise ValueError("queue_url is required")
        if not self.region:
            raise ValueError("region is required")
        if not callable(self.handler):
            raise ValueError(f"handler must be callable, got {type(self.handler).__name__}")
        if self.poll_interval_seconds < 0:
            raise ValueError(f"poll_interval_seconds must be >= 0, got {self.poll_interval_seconds}")
        # SQS only accepts whole seconds for these
        for name in ("wait_seconds", "visibility_timeout_seconds", "send_delay_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if not 0 <= self.wait_seconds <= MAX_WAIT_SECONDS:
            raise ValueError(f"wait_seconds must be between 0 and {MAX_WAIT_SECONDS}, got {self.wait_seconds}")
        if not 0 <= self.visibility_timeout_seconds <= MAX_VISIBILITY_TIMEOUT_SECONDS:
            raise ValueError(
                f"visibility_timeout_seconds must be between 0 and {MAX_VISIBILITY_TIMEOUT_SECONDS}, "
                f"got {self.visibility_timeout_seconds}"
            )
        if not 0 <= self.send_delay_seconds <= MAX_DELAY_SECONDS:
            raise ValueError(
                f"send_delay_seconds must be between 0 and {MAX_DELAY_SECONDS}, got {self.send_delay_seconds}"
            )
