#!/usr/bin/env python3
"""
SQS Worker CLI - Main entry point.

Commands:
  sqs-worker worker    - Poll a queue and process messages
  sqs-worker queue     - Queue utilities (send)

The global -v/--verbose flag is stored on the click context; the worker
command passes it to its JSON log setup.
"""

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from sqs_worker import __version__
from sqs_worker.errors import QueueError

console = Console(stderr=True)

# boto3/botocore log every request at DEBUG
NOISY_LOGGERS = ("boto3", "botocore", "urllib3")


def setup_console_logging(verbose: bool = False) -> None:
    """Human-readable logs for interactive commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=verbose)]
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="sqs-worker")
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """SQS Worker - poll an SQS queue and hand each message to a handler."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    setup_console_logging(verbose)


from sqs_worker.cli.worker import worker
from sqs_worker.cli.queue import queue

cli.add_command(worker)
cli.add_command(queue)


def main():
    try:
        cli(obj={})
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)
    except QueueError as e:
        console.print(f"[red]SQS error:[/red] {e}")
        sys.exit(2)
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if '--verbose' in sys.argv or '-v' in sys.argv:
            raise
        sys.exit(1)


if __name__ == '__main__':
    main()
