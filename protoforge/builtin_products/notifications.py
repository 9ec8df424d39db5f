"""
Notification channels: sample Performer variants for keyed factories.

Each channel validates its payload and returns a DeliveryReceipt describing
what would be sent. Nothing is transmitted.
"""

from dataclasses import dataclass
from typing import Any, Optional

from protoforge.exceptions import InvalidOperationError
from protoforge.factory.keyed import Creator, KeyedFactory


@dataclass(frozen=True)
class DeliveryReceipt:
    """Result of Notification.perform()."""

    channel: str
    recipient: str
    message: str


class Notification:
    """Base notification. Subclasses set ``channel``."""

    channel = "generic"

    def __init__(self, recipient: str = "default"):
        self.recipient = recipient

    def _check(self, payload: Any) -> str:
        if not isinstance(payload, str) or not payload.strip():
            raise InvalidOperationError(
                f"{self.channel} notification needs a non-empty message, got {payload!r}"
            )
        if not self.recipient:
            raise InvalidOperationError(f"{self.channel} notification has no recipient")
        return payload

    def perform(self, payload: Any) -> DeliveryReceipt:
        message = self._check(payload)
        return DeliveryReceipt(self.channel, self.recipient, message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(recipient={self.recipient!r})"


class EmailNotification(Notification):
    """Email channel."""

    channel = "email"


class SmsNotification(Notification):
    """SMS channel. Messages longer than max_length are rejected."""

    channel = "sms"
    max_length = 160

    def perform(self, payload: Any) -> DeliveryReceipt:
        message = self._check(payload)
        if len(message) > self.max_length:
            raise InvalidOperationError(
                f"SMS message is {len(message)} characters, limit is {self.max_length}"
            )
        return DeliveryReceipt(self.channel, self.recipient, message)


class PushNotification(Notification):
    """Push channel."""

    channel = "push"


class EmailCreator(Creator):
    def factory_method(self, **kwargs: Any) -> EmailNotification:
        return EmailNotification(**kwargs)


class SmsCreator(Creator):
    def factory_method(self, **kwargs: Any) -> SmsNotification:
        return SmsNotification(**kwargs)


class PushCreator(Creator):
    def factory_method(self, **kwargs: Any) -> PushNotification:
        return PushNotification(**kwargs)


def notification_factory(factory: Optional[KeyedFactory] = None) -> KeyedFactory:
    """Register the built-in channels on factory (a new one by default)."""
    if factory is None:
        factory = KeyedFactory(name="notifications")
    factory.register("email", EmailCreator(), description="Email notification")
    factory.register("sms", SmsCreator(), description="SMS notification")
    factory.register("push", PushCreator(), description="Push notification")
    return factory
