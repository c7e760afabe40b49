"""
SQS Worker Queue CLI - Queue utilities.

Usage:
  sqs-worker queue send --queue-url <url> --message "job-42"
  sqs-worker queue send --queue-url <url> --file payloads.txt
"""

import os
import sys

import click
from rich.console import Console

console = Console()


def get_sqs_client(endpoint_url=None):
    """Get SQS client from environment."""
    from sqs_worker.io.sqs import SQSClient

    region = os.environ.get('SQS_WORKER_REGION', 'us-east-1')
    return SQSClient(region, endpoint_url=endpoint_url or os.environ.get('AWS_ENDPOINT_URL'))


def read_payloads(file_path: str) -> list[str]:
    """One payload per line; empty lines and lines starting with # are skipped."""
    payloads = []
    with open(file_path, 'r') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            payloads.append(line)
    return payloads


@click.group()
def queue():
    """Queue utilities (send)."""
    pass


@queue.command()
@click.option('--queue-url', help='SQS queue URL (default: from SQS_WORKER_QUEUE_URL env)')
@click.option('--message', 'messages', multiple=True, help='Message body. Can be specified multiple times.')
@click.option('--file', type=click.Path(exists=True), help='File with one message body per line')
@click.option('--delay', type=click.IntRange(0, 900), default=1, help='Delivery delay (seconds)')
@click.option('--region', help='AWS region (default: from SQS_WORKER_REGION env or us-east-1)')
@click.option('--endpoint-url', help='SQS endpoint override (default: from AWS_ENDPOINT_URL env)')
def send(queue_url, messages, file, delay, region, endpoint_url):
    """Send messages to a queue."""
    from sqs_worker.errors import QueueError

    queue_url = queue_url or os.environ.get('SQS_WORKER_QUEUE_URL')
    if not queue_url:
        console.print("[red]Error:[/red] Must specify --queue-url or set SQS_WORKER_QUEUE_URL")
        sys.exit(1)

    if not file and not messages:
        console.print("[red]Error:[/red] Must specify either --file or --message")
        sys.exit(1)

    if file and messages:
        console.print("[red]Error:[/red] Cannot specify both --file and --message")
        sys.exit(1)

    # Override region if provided
    if region:
        os.environ['SQS_WORKER_REGION'] = region

    payloads = read_payloads(file) if file else list(messages)

    try:
        sqs = get_sqs_client(endpoint_url)
        for payload in payloads:
            message_id = sqs.send(queue_url, payload, delay_seconds=delay)
            console.print(f"[dim]Sent {message_id}[/dim]")
        console.print(f"[green]✓[/green] Sent {len(payloads)} message(s)")

    except QueueError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)
