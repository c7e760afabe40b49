"""
SQS Worker CLI - Run a polling worker.

Usage:
  sqs-worker worker --queue-url https://sqs... --handler mypkg.jobs:handle

Environment variables:
  SQS_WORKER_QUEUE_URL (queue URL, if --queue-url is omitted)
  SQS_WORKER_REGION (AWS region, default us-east-1)
  SQS_WORKER_HANDLER (handler reference, default "log")
  AWS_ENDPOINT_URL (optional endpoint override, e.g. LocalStack)
"""

import logging
import os
import sys

import click
from dotenv import load_dotenv

# Use "sqs_worker" namespace so logs appear at INFO level
logger = logging.getLogger("sqs_worker.cli.worker")

# Load environment variables from .env file if present
load_dotenv()


@click.command()
@click.option('--queue-url', type=str, help='SQS queue URL (default: from SQS_WORKER_QUEUE_URL env)')
@click.option('--region', type=str, help='AWS region (default: from SQS_WORKER_REGION env or us-east-1)')
@click.option('--handler', 'handler_ref', type=str,
              help='Handler name or import path module:function (default: from SQS_WORKER_HANDLER env or "log")')
@click.option('--poll-interval', type=float, default=5.0, help='Seconds to wait between polls')
@click.option('--wait', 'wait_seconds', type=int, default=1, help='SQS long-poll wait time (seconds)')
@click.option('--visibility-timeout', type=int, default=30, help='SQS visibility timeout (seconds)')
@click.option('--send-delay', type=int, default=1, help='Delivery delay for messages sent by the worker (seconds)')
@click.option('--shutdown-after-empty', type=int, default=0, help='Stop after N empty polls (0 = run until stopped)')
@click.option('--endpoint-url', type=str, help='SQS endpoint override (default: from AWS_ENDPOINT_URL env)')
@click.pass_context
def worker(
    ctx,
    queue_url,
    region,
    handler_ref,
    poll_interval,
    wait_seconds,
    visibility_timeout,
    send_delay,
    shutdown_after_empty,
    endpoint_url,
):
    """Poll an SQS queue and hand each message to a handler."""

    # Setup logging FIRST: root=WARNING, sqs_worker namespace=INFO (DEBUG with sqs-worker -v)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    from sqs_worker.logging_setup import setup_logging
    setup_logging(verbose)

    from sqs_worker.core.registry import resolve_handler
    from sqs_worker.core.worker import create_worker
    from sqs_worker.errors import SessionError

    queue_url = queue_url or os.environ.get('SQS_WORKER_QUEUE_URL')
    if not queue_url:
        logger.error("Missing queue URL. Provide --queue-url or set SQS_WORKER_QUEUE_URL environment variable")
        sys.exit(1)

    region = region or os.environ.get('SQS_WORKER_REGION', 'us-east-1')
    handler_ref = handler_ref or os.environ.get('SQS_WORKER_HANDLER', 'log')
    endpoint_url = endpoint_url or os.environ.get('AWS_ENDPOINT_URL')

    try:
        handler = resolve_handler(handler_ref)
    except ValueError as e:
        logger.error(f"Invalid handler: {e}")
        sys.exit(1)

    logger.info("Starting SQS Worker", extra={"queue_url": queue_url, "region": region, "handler": handler_ref})

    try:
        runtime = create_worker(
            queue_url,
            region,
            handler,
            poll_interval,
            wait_seconds=wait_seconds,
            visibility_timeout_seconds=visibility_timeout,
            send_delay_seconds=send_delay,
            endpoint_url=endpoint_url,
            shutdown_after_empty_polls=shutdown_after_empty,
        )
    except (SessionError, ValueError) as e:
        logger.error(f"Worker could not be created: {e}")
        sys.exit(1)

    try:
        runtime.install_signal_handlers()
        runtime.start_polling()
        logger.info("Worker completed successfully")
    except KeyboardInterrupt:
        logger.info("Worker interrupted by user")
    except Exception as e:
        logger.error(f"Worker failed: {e}", exc_info=True)
        raise
    finally:
        logger.info("Worker shutdown complete")
