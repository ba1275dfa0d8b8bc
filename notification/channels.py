#!/usr/bin/env python3
"""
Notification Channels

Delivery backends for application status notifications. Every channel
implements the same interface, so the notifier can be pointed at a webhook
in production and at the log in development or tests.

Usage:
    from notification.channels import NotificationChannelFactory

    channel = NotificationChannelFactory.get_channel('webhook', url='https://mail.example.org/')
    channel.send(recipient, subject, payload)

A channel returns True on success and raises NotificationDeliveryError on
failure.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional
import logging
import os
import urllib.parse

import requests

from core.exceptions import NotificationDeliveryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


def _validate_webhook_url(url: Optional[str]) -> bool:
    """Accept only absolute http(s) URLs with a hostname."""
    if not url:
        return False
    try:
        parsed = urllib.parse.urlparse(url)
    except ValueError as e:
        logger.error(f"URL validation error: {e}")
        return False

    if parsed.scheme not in ('http', 'https'):
        logger.error(f"Invalid URL scheme: {parsed.scheme}")
        return False

    if not parsed.hostname:
        logger.error("URL missing hostname")
        return False

    return True


def _is_dry_run_mode() -> bool:
    """Check if notification channels should run in dry-run (log-only) mode."""
    return os.environ.get('NOTIFICATION_DRY_RUN', '').lower() in ('true', '1', 'yes')


def _mask_email(email: str) -> str:
    """
    Mask email address for safe logging (PII protection).

    Shows only domain, e.g., "***@example.com"
    """
    if not email or '@' not in email:
        return "***"
    local, domain = email.rsplit('@', 1)
    return f"***@{domain}"


class NotificationChannel(ABC):
    """
    Abstract base class for all notification channels.
    """

    @property
    @abstractmethod
    def channel_type(self) -> str:
        """Return the channel type identifier."""
        pass

    @abstractmethod
    def send(self, recipient: str, subject: str, payload: Dict[str, Any]) -> bool:
        """
        Deliver a notification.

        Args:
            recipient: Volunteer email address
            subject: Short human-readable subject
            payload: JSON-serialisable body

        Returns:
            True when delivered

        Raises:
            NotificationDeliveryError: if delivery failed
        """
        pass

    def validate_config(self) -> bool:
        """Check whether the channel has what it needs to deliver."""
        return True


class WebhookChannel(NotificationChannel):
    """POSTs the payload as JSON to the mail-sending webhook."""

    def __init__(self, url: Optional[str] = None, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        self.url = url or os.environ.get('NOTIFICATION_WEBHOOK_URL')
        self.timeout = timeout

    @property
    def channel_type(self) -> str:
        return 'webhook'

    def validate_config(self) -> bool:
        return _validate_webhook_url(self.url)

    def send(self, recipient: str, subject: str, payload: Dict[str, Any]) -> bool:
        if not self.validate_config():
            raise NotificationDeliveryError(f"Invalid or missing webhook URL: {self.url!r}")

        if _is_dry_run_mode():
            logger.info(f"[DRY RUN] Webhook to {_mask_email(recipient)}: {subject}")
            return True

        headers = {
            'Content-Type': 'application/json',
            'User-Agent': 'VolunteerMatch-Notification-Service/1.0'
        }

        try:
            response = requests.post(
                self.url,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise NotificationDeliveryError(f"Failed to send webhook: {e}") from e

        parsed = urllib.parse.urlparse(self.url)
        safe_url = f"{parsed.scheme}://{parsed.hostname}{parsed.path}"
        logger.info(f"Webhook sent to {safe_url} for {_mask_email(recipient)}")
        return True


class LogChannel(NotificationChannel):
    """Writes the notification to the log instead of delivering it."""

    def __init__(self, **_ignored):
        pass

    @property
    def channel_type(self) -> str:
        return 'log'

    def send(self, recipient: str, subject: str, payload: Dict[str, Any]) -> bool:
        logger.info(f"[LOG] {_mask_email(recipient)}: {subject} (status={payload.get('status')})")
        return True


class NotificationChannelFactory:
    """
    Factory for creating notification channels.

    New channels can be registered at runtime with ``register_channel``.
    """

    _channels: Dict[str, type] = {
        'webhook': WebhookChannel,
        'log': LogChannel,
    }

    @classmethod
    def get_channel(cls, channel_type: str, **kwargs) -> NotificationChannel:
        """
        Get a notification channel instance by type.

        Raises:
            ValueError: If channel type is not registered
        """
        channel_class = cls._channels.get(channel_type.lower())
        if not channel_class:
            raise ValueError(f"Unknown channel type: {channel_type}. "
                             f"Available: {', '.join(cls._channels.keys())}")

        return channel_class(**kwargs)

    @classmethod
    def register_channel(cls, channel_type: str, channel_class: type):
        if not issubclass(channel_class, NotificationChannel):
            raise ValueError("Channel class must extend NotificationChannel")

        cls._channels[channel_type.lower()] = channel_class
        logger.info(f"Registered new channel type: {channel_type}")

    @classmethod
    def list_channels(cls) -> list:
        return list(cls._channels.keys())
