from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Optional

import requests

from ...dtos.deploy import NotificationMessage, ResolvedDeployment
from ...messages import notify as msg
from ..errors import DeliveryFailure, EncodingError
from .base import NotificationChannel

logger = logging.getLogger(__name__)


class SlackWebhookClient:
    def __init__(self, timeout: Optional[float] = None):
        # None keeps the transport default
        self.timeout = timeout

    @staticmethod
    def encode(text: str) -> bytes:
        try:
            return json.dumps(asdict(NotificationMessage(text=text))).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncodingError(f"Could not encode Slack message: {e}") from e

    def deliver(self, webhook_url: str, text: str) -> None:
        """POST ``{"text": text}`` to an incoming webhook.

        Raises:
            EncodingError: if the payload cannot be serialized
            DeliveryFailure: on a transport error or any status other than 200
        """
        data = self.encode(text)

        try:
            response = requests.post(
                webhook_url,
                data=data,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise DeliveryFailure(f"Slack webhook request failed: {e}", error=e) from e

        if response.status_code != 200:
            status = f"{response.status_code} {response.reason}"
            raise DeliveryFailure(f"Slack webhook error: {status}", status=status)


class SlackChannel(NotificationChannel):
    def __init__(self, client: Optional[SlackWebhookClient] = None):
        self.client = client or SlackWebhookClient()

    def send(self, resolved: ResolvedDeployment, text: str) -> bool:
        deployment = resolved.deployment

        try:
            self.client.deliver(resolved.target.slack_url, text)
        except EncodingError as e:
            logger.error(msg.COULD_NOT_ENCODE_MESSAGE, deployment.id, e)
            return False
        except DeliveryFailure as e:
            logger.error(
                msg.DELIVERY_FAILED,
                deployment.application_name,
                deployment.target_name,
                deployment.commit_sha,
                e.error,
                e.status,
            )
            return False

        logger.info(
            msg.DELIVERY_SUCCEEDED,
            deployment.application_name,
            deployment.target_name,
            deployment.commit_sha,
        )
        return True
