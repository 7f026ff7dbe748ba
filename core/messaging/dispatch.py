from __future__ import annotations

import logging
from dataclasses import dataclass
from email.utils import make_msgid
from typing import Optional

from django.conf import settings
from django.core.mail import EmailMessage
from requests.exceptions import RequestException
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from core.messaging.models import Channel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    success: bool
    provider_id: Optional[str] = None
    error: Optional[str] = None


class TwilioSmsProvider:
    def __init__(self, *, account_sid: str, auth_token: str, default_from: str = ""):
        self.default_from = default_from
        self._client = Client(account_sid, auth_token) if account_sid and auth_token else None

    def _address(self, number: str) -> str:
        return number

    def send(self, *, to: str, body: str, subject: Optional[str] = None, sender: Optional[str] = None) -> SendResult:
        if self._client is None:
            return SendResult(success=False, error="Twilio is not configured")
        from_num = sender or self.default_from
        if not from_num:
            return SendResult(success=False, error="No sender number configured")

        try:
            msg = self._client.messages.create(
                to=self._address(to),
                from_=self._address(from_num),
                body=body,
            )
        except (TwilioException, RequestException) as exc:
            logger.warning("twilio send failed to=%s err=%s", to, exc)
            return SendResult(success=False, error=str(exc))
        return SendResult(success=True, provider_id=msg.sid)


class TwilioWhatsAppProvider(TwilioSmsProvider):
    def _address(self, number: str) -> str:
        return number if number.startswith("whatsapp:") else f"whatsapp:{number}"


class EmailProvider:
    def __init__(self, *, default_from: str = ""):
        self.default_from = default_from

    def send(self, *, to: str, body: str, subject: Optional[str] = None, sender: Optional[str] = None) -> SendResult:
        from_email = sender or self.default_from or getattr(settings, "DEFAULT_FROM_EMAIL", None) or "no-reply@localhost"
        message_id = make_msgid()
        msg = EmailMessage(
            subject=subject or "",
            body=body,
            from_email=from_email,
            to=[to],
            headers={"Message-ID": message_id},
        )
        try:
            msg.send(fail_silently=False)
        except (OSError, ValueError) as exc:
            logger.warning("email send failed to=%s err=%s", to, exc)
            return SendResult(success=False, error=str(exc))
        return SendResult(success=True, provider_id=message_id)


class MessageDispatcher:
    """
    Routes an outbound message to the provider registered for its channel.
    Never raises for provider problems: failures come back as SendResult.
    """

    def __init__(self, providers: dict):
        self.providers = dict(providers)

    @classmethod
    def from_settings(cls) -> "MessageDispatcher":
        sid = getattr(settings, "TWILIO_ACCOUNT_SID", "")
        token = getattr(settings, "TWILIO_AUTH_TOKEN", "")
        return cls(
            {
                Channel.SMS.value: TwilioSmsProvider(
                    account_sid=sid,
                    auth_token=token,
                    default_from=getattr(settings, "TWILIO_PHONE_NUMBER", ""),
                ),
                Channel.WHATSAPP.value: TwilioWhatsAppProvider(
                    account_sid=sid,
                    auth_token=token,
                    default_from=getattr(settings, "TWILIO_WHATSAPP_NUMBER", ""),
                ),
                Channel.EMAIL.value: EmailProvider(default_from=getattr(settings, "DEFAULT_FROM_EMAIL", "")),
            }
        )

    def send(
        self,
        channel: str,
        to: str,
        body: str,
        subject: Optional[str] = None,
        sender: Optional[str] = None,
    ) -> SendResult:
        provider = self.providers.get(channel)
        if provider is None:
            return SendResult(success=False, error=f"Unsupported channel: {channel}")
        if not to:
            return SendResult(success=False, error="Recipient is required")

        result = provider.send(to=to, body=body, subject=subject, sender=sender)
        if result.success:
            logger.info("message sent channel=%s provider_id=%s", channel, result.provider_id)
        else:
            logger.warning("message failed channel=%s err=%s", channel, result.error)
        return result
