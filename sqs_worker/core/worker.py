from __future__ import annotations

import logging
import signal
import threading
from typing import Any

from sqs_worker.config import WorkerConfig
from sqs_worker.core.models import Handler, Message, PollOutcome
from sqs_worker.errors import DeleteError, ReceiveError, SessionError
from sqs_worker.io.sqs import SQSClient

# Use "sqs_worker" namespace so logs appear at INFO level (not WARNING from root)
logger = logging.getLogger("sqs_worker.core.worker")


class PollingWorker:
    """
    Polls one SQS queue and hands each message to a handler.

    Flow, once per poll interval:
    1. Receive at most one message
    2. If one arrived, call the handler with its body
    3. Delete the message only if the handler succeeded

    Failures never stop the loop. A message that is not deleted (handler
    failure, delete failure, crash) becomes visible again after the
    visibility timeout and is redelivered by SQS.
    """

    def __init__(
        self,
        cfg: WorkerConfig,
        sqs: SQSClient,
        log: logging.Logger | None = None,
    ):
        """
        Initialize worker.

        Args:
            cfg: Worker configuration
            sqs: SQS client
            log: Logger receiving lifecycle events (default: module logger)
        """
        self.cfg = cfg
        self.sqs = sqs
        self.log = log or logger

        self._stop_event = threading.Event()
        self._processing_message: bool = False

        # Empty poll tracking
        self._empty_polls: int = 0

    @property
    def queue_url(self) -> str:
        return self.cfg.queue_url

    @property
    def handler(self) -> Handler:
        return self.cfg.handler

    def start_polling(self) -> None:
        """
        Main loop: wait the poll interval, then run one poll cycle.
        Runs until stop() is called, or until shutdown_after_empty_polls
        consecutive empty polls when that is > 0.
        """
        if self.cfg.shutdown_after_empty_polls > 0:
            self.log.info(
                f"Starting polling {self.queue_url} "
                f"(shutdown after {self.cfg.shutdown_after_empty_polls} empty polls)"
            )
        else:
            self.log.info(f"Starting polling {self.queue_url} (running until stopped)")

        self._empty_polls = 0

        # wait() returns True once stop() was called, including before this loop started
        while not self._stop_event.wait(self.cfg.poll_interval_seconds):
            outcome = self.poll_once()

            if outcome is PollOutcome.EMPTY:
                self._empty_polls += 1
                if 0 < self.cfg.shutdown_after_empty_polls <= self._empty_polls:
                    self.log.info("Shutdown threshold reached, stopping")
                    break
            elif outcome is not PollOutcome.RECEIVE_FAILED:
                self._empty_polls = 0

        self.log.info("Polling stopped")

    def stop(self) -> None:
        """Request the loop to end. The current cycle, if any, completes first. Stopping is permanent."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def poll_once(self) -> PollOutcome:
        """Run a single receive -> handle -> delete cycle."""
        try:
            msg = self.sqs.receive_one(
                queue_url=self.queue_url,
                wait_seconds=self.cfg.wait_seconds,
                visibility_timeout=self.cfg.visibility_timeout_seconds,
            )
        except ReceiveError as e:
            self.log.error(f"Receive failed: {e}", extra={"queue_url": self.queue_url})
            return PollOutcome.RECEIVE_FAILED

        if msg is None:
            self.log.debug("No messages")
            return PollOutcome.EMPTY

        self.log.info(
            f"Message received: {msg.body}",
            extra={"message_id": msg.message_id, "queue_url": self.queue_url},
        )

        self._processing_message = True
        try:
            if not self._handle(msg):
                return PollOutcome.HANDLER_FAILED
        finally:
            self._processing_message = False

        try:
            self.sqs.delete(self.queue_url, msg.receipt_handle)
        except DeleteError as e:
            self.log.error(
                f"Delete failed, message will be redelivered after visibility timeout: {e}",
                extra={"message_id": msg.message_id, "queue_url": self.queue_url},
            )
            return PollOutcome.DELETE_FAILED

        self.log.info("Message deleted", extra={"message_id": msg.message_id})
        return PollOutcome.PROCESSED

    def send_message(self, payload: str) -> str:
        """
        Enqueue a message on this worker's queue.

        Returns:
            The SQS message id

        Raises:
            SendError: If the message could not be sent
        """
        return self.sqs.send(self.queue_url, payload, delay_seconds=self.cfg.send_delay_seconds)

    def install_signal_handlers(self) -> None:
        """
        Install signal handlers for graceful shutdown.

        SIGTERM/SIGINT stop polling after the current message. A second
        signal raises KeyboardInterrupt; an unfinished message is then
        redelivered after its visibility timeout.
        """

        def signal_handler(signum: int, frame: Any) -> None:
            sig_name = signal.Signals(signum).name
            if not self.stopped:
                if self._processing_message:
                    self.log.info(f"Received {sig_name}, stopping after the current message")
                else:
                    self.log.info(f"Received {sig_name}, stopping")
                self.stop()
            else:
                self.log.warning(f"Received second {sig_name}, forcing shutdown")
                raise KeyboardInterrupt("Forced shutdown by second signal")

        signal.signal(signal.SIGTERM, signal_handler)
        signal.signal(signal.SIGINT, signal_handler)
        self.log.info("Signal handlers installed for graceful shutdown (SIGTERM, SIGINT)")

    # ---- internals ----

    def _handle(self, msg: Message) -> bool:
        """Call the handler. Returns True if the message should be deleted."""
        try:
            result = self.handler(msg.body)
        except Exception as e:
            self.log.error(
                f"Handler failed, message left for redelivery: {e}",
                extra={"message_id": msg.message_id},
                exc_info=True,
            )
            return False

        if result is False:
            self.log.warning(
                "Handler rejected message, message left for redelivery",
                extra={"message_id": msg.message_id},
            )
            return False
        return True


def create_worker(
    queue_url: str,
    region: str,
    handler: Handler,
    poll_interval_seconds: float,
    log: logging.Logger | None = None,
    **tunables: Any,
) -> PollingWorker:
    """
    Build a worker and its SQS session.

    Args:
        queue_url: SQS queue URL
        region: AWS region
        handler: Called with each message body
        poll_interval_seconds: Wait between poll cycles
        log: Optional logger for the worker
        **tunables: Other WorkerConfig fields (wait_seconds, visibility_timeout_seconds, ...)

    Raises:
        SessionError: If the SQS session cannot be established
        ValueError: If the configuration is invalid
    """
    cfg = WorkerConfig(
        queue_url=queue_url,
        region=region,
        handler=handler,
        poll_interval_seconds=poll_interval_seconds,
        **tunables,
    )
    try:
        sqs = SQSClient(cfg.region, endpoint_url=cfg.endpoint_url)
    except SessionError as e:
        (log or logger).error(f"Failed to create session: {e}")
        raise
    return PollingWorker(cfg, sqs, log=log)
