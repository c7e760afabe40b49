import logging

logger = logging.getLogger("sqs_worker.handlers")


def log_payload(payload: str) -> None:
    """Default handler: write the message body to the log."""
    logger.info(payload, extra={"payload_length": len(payload)})
