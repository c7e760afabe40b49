import pytest
import boto3
from moto import mock_aws

from sqs_worker.core.models import Message

REGION = "us-east-1"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """
    Fake credentials so boto3 never touches a real account, and no custom
    endpoint (LocalStack etc.) leaks in from the developer environment.
    """
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    for var in (
        "AWS_ENDPOINT_URL",
        "AWS_ENDPOINT_URL_SQS",
        "SQS_WORKER_QUEUE_URL",
        "SQS_WORKER_REGION",
        "SQS_WORKER_HANDLER",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture()
def sqs_queue():
    """Moto-backed SQS queue. Yields (boto3 client, queue url)."""
    with mock_aws():
        client = boto3.client("sqs", region_name=REGION)
        queue_url = client.create_queue(QueueName="test-queue-one")["QueueUrl"]
        yield client, queue_url


class FakeSQS:
    """
    In-memory stand-in for SQSClient.

    `receives` is a script of what each receive_one call returns: a Message,
    None, or an exception instance to raise. Once exhausted, receive_one
    returns None. Every call is appended to `calls` in order.
    """

    def __init__(self, receives=None, delete_error=None, send_error=None):
        self.receives = list(receives or [])
        self.delete_error = delete_error
        self.send_error = send_error
        self.calls = []
        self.sent = []
        self.on_receive = None

    def receive_one(self, queue_url, wait_seconds, visibility_timeout):
        self.calls.append(("receive", queue_url, wait_seconds, visibility_timeout))
        if self.on_receive is not None:
            self.on_receive(len([c for c in self.calls if c[0] == "receive"]))
        if not self.receives:
            return None
        item = self.receives.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def delete(self, queue_url, receipt_handle):
        self.calls.append(("delete", receipt_handle))
        if self.delete_error is not None:
            raise self.delete_error

    def send(self, queue_url, body, delay_seconds=1):
        self.calls.append(("send", body, delay_seconds))
        if self.send_error is not None:
            raise self.send_error
        self.sent.append({"queue_url": queue_url, "body": body, "delay_seconds": delay_seconds})
        return f"msg-{len(self.sent)}"


def make_message(body="hello", handle="h1", message_id="m1"):
    return Message(message_id=message_id, receipt_handle=handle, body=body)


@pytest.fixture()
def fake_sqs_factory():
    return FakeSQS


@pytest.fixture()
def message_factory():
    return make_message
