"""Operator Notifications — delivery sinks for "cold transfer created" events.

Invariants:
    - Implements core.repository_protocols.NotificationSink
    - Sinks raise NotificationError on delivery failure; the orchestrator decides
      to swallow it (notification is outside the consistency boundary)
    - Payload carries ids, amount and workflow summary only — never requestor email

Design Decisions:
    - LogNotificationSink is the default: no outbound IO unless a webhook is configured
    - httpx.AsyncClient per call: notifications are rare, no pooled client to manage
"""

import logging

import httpx

from coldflow.config import Settings
from coldflow.core.errors import NotificationError, ErrorContext
from coldflow.core.repository_protocols import NotificationSink
from coldflow.core.transfer_records import TransferRequest

logger = logging.getLogger(__name__)


def build_transfer_created_payload(
    transfer: TransferRequest, recipients: tuple[str, ...],
) -> dict:
    workflow = transfer.workflow
    return {
        "event": "cold_transfer_created",
        "recipients": list(recipients),
        "transfer": {
            "id": str(transfer.id),
            "wallet_id": str(transfer.wallet_id),
            "amount": transfer.amount_string,
            "coin": transfer.coin,
            "status": transfer.status.value,
            "required_approvals": transfer.required_approvals,
            "urgency_level": workflow.urgency_level if workflow else None,
            "requires_manual_review": (
                workflow.requires_manual_review if workflow else None
            ),
            "completion_deadline": (
                workflow.sla_deadlines.completion.isoformat() if workflow else None
            ),
        },
    }


class LogNotificationSink:
    """Writes the notification to the application log."""

    def __init__(self, recipients: tuple[str, ...] = ()):
        self.recipients = recipients

    async def notify_transfer_created(self, transfer: TransferRequest) -> None:
        payload = build_transfer_created_payload(transfer, self.recipients)
        logger.info(
            f"Operators notified of cold transfer {transfer.id} "
            f"({len(self.recipients)} recipient(s))",
            extra={
                "event": payload["event"],
                "transfer_id": str(transfer.id),
                "channel": "log",
            },
        )


class WebhookNotificationSink:
    """POSTs the notification payload as JSON to an operator webhook."""

    def __init__(
        self,
        url: str,
        recipients: tuple[str, ...] = (),
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.recipients = recipients
        self.timeout_seconds = timeout_seconds
        self.transport = transport

    async def notify_transfer_created(self, transfer: TransferRequest) -> None:
        payload = build_transfer_created_payload(transfer, self.recipients)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self.transport,
            ) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise NotificationError(
                str(e), "webhook", ErrorContext(transfer_id=str(transfer.id)),
            ) from e
        logger.info(
            f"Webhook notified of cold transfer {transfer.id}",
            extra={
                "event": payload["event"],
                "transfer_id": str(transfer.id),
                "channel": "webhook",
            },
        )


def build_notification_sink(settings: Settings) -> NotificationSink:
    """Webhook sink when a URL is configured, log sink otherwise."""
    recipients = tuple(settings.cold_operator_notification_list)
    if settings.notification_webhook_url:
        return WebhookNotificationSink(
            settings.notification_webhook_url,
            recipients,
            settings.notification_timeout_seconds,
        )
    return LogNotificationSink(recipients)
