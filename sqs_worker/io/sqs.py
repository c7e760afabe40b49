from __future__ import annotations
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from sqs_worker.core.models import Message
from sqs_worker.errors import DeleteError, ReceiveError, SendError, SessionError


class SQSClient:
    """AWS SQS client for the polling worker: receive one, delete, send."""

    def __init__(self, region: str, endpoint_url: Optional[str] = None):
        """
        Initialize SQS client.

        Args:
            region: AWS region (e.g., "eu-central-1")
            endpoint_url: Optional endpoint override (LocalStack, lclq, ...)

        Raises:
            SessionError: If boto3 cannot build a client for this region/endpoint
        """
        self.region = region
        self.endpoint_url = endpoint_url
        try:
            self.client = boto3.client('sqs', region_name=region, endpoint_url=endpoint_url)
        except (BotoCoreError, ValueError) as e:
            raise SessionError(f"Failed to create SQS session for region {region!r}: {e}") from e

    def receive_one(
        self,
        queue_url: str,
        wait_seconds: int,
        visibility_timeout: int,
    ) -> Optional[Message]:
        """
        Long-poll and return a single message or None.

        Args:
            queue_url: SQS queue URL
            wait_seconds: Long polling wait time (0-20 seconds)
            visibility_timeout: How long the message should be hidden from other consumers

        Returns:
            Message or None if no messages available

        Raises:
            ReceiveError: If the SQS call itself fails (network, auth, throttling)
        """
        try:
            response = self.client.receive_message(
                QueueUrl=queue_url,
                MaxNumberOfMessages=1,
                WaitTimeSeconds=wait_seconds,
                VisibilityTimeout=visibility_timeout,
                AttributeNames=['All'],
                MessageAttributeNames=['All']
            )
        except (ClientError, BotoCoreError) as e:
            raise ReceiveError(f"Failed to receive message from SQS: {e}") from e

        messages = response.get('Messages', [])
        if not messages:
            return None

        msg = messages[0]
        return Message(
            message_id=msg['MessageId'],
            receipt_handle=msg['ReceiptHandle'],
            body=msg.get('Body', ''),
            attributes=msg.get('Attributes', {}),
            message_attributes=msg.get('MessageAttributes', {}),
        )

    def delete(self, queue_url: str, receipt_handle: str) -> None:
        """
        Delete a message from the queue.

        Args:
            queue_url: SQS queue URL
            receipt_handle: Receipt handle from received message

        Raises:
            DeleteError: If the message could not be deleted (it will be redelivered)
        """
        try:
            self.client.delete_message(
                QueueUrl=queue_url,
                ReceiptHandle=receipt_handle
            )
        except (ClientError, BotoCoreError) as e:
            raise DeleteError(f"Failed to delete SQS message: {e}") from e

    def send(self, queue_url: str, body: str, delay_seconds: int = 1) -> str:
        """
        Send a message to the queue.

        Args:
            queue_url: SQS queue URL
            body: Message body
            delay_seconds: Delivery delay (0-900 seconds)

        Returns:
            The SQS message id

        Raises:
            SendError: If the message could not be sent
        """
        try:
            response = self.client.send_message(
                QueueUrl=queue_url,
                DelaySeconds=delay_seconds,
                MessageBody=body
            )
        except (ClientError, BotoCoreError) as e:
            raise SendError(f"Failed to send SQS message: {e}") from e

        return response.get('MessageId', '')
