#!/usr/bin/env python3
"""
Notification Service - status-change notifications for volunteers.

Delivery is fire-and-forget: the caller has already committed the status
change, and a failed send is logged and reported as ``False``. There is no
retry and no queue.

Usage:
    from notification.service import NotificationService

    service = NotificationService.from_config(config.notifications)
    service.notify_status_change(volunteer.email, application)
"""

import logging
from typing import Optional

from core.config_loader import NotificationConfig
from core.exceptions import NotificationDeliveryError
from core.models import Application
from notification.channels import (
    NotificationChannel,
    NotificationChannelFactory,
    LogChannel,
    _mask_email,
)
from notification.message_builder import NotificationMessageBuilder

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Sends status-change notifications through a single channel.
    """

    def __init__(self, channel: NotificationChannel, enabled: bool = True):
        self.channel = channel
        self.enabled = enabled

    @classmethod
    def from_config(cls, config: Optional[NotificationConfig] = None) -> "NotificationService":
        config = config or NotificationConfig()

        channel_type = config.channel
        kwargs = {}
        if channel_type == 'webhook':
            if not config.webhook_url:
                logger.warning("No notification webhook configured. Falling back to log channel.")
                channel_type = 'log'
            else:
                kwargs = {'url': config.webhook_url, 'timeout': config.timeout_seconds}

        channel = NotificationChannelFactory.get_channel(channel_type, **kwargs)
        return cls(channel=channel, enabled=config.enabled)

    def notify_status_change(self, email: Optional[str], application: Application) -> bool:
        """
        Tell a volunteer their application status changed.

        Returns True if delivered, False if disabled, skipped or failed.
        """
        if not self.enabled:
            logger.debug(f"Notifications disabled; skipping application {application.id}")
            return False

        if not email:
            logger.warning(f"No email on file for application {application.id}; notification skipped")
            return False

        message = NotificationMessageBuilder.build_status_change(email, application.status)
        subject = NotificationMessageBuilder.subject_for(application)

        try:
            self.channel.send(email, subject, message.to_payload())
        except NotificationDeliveryError as e:
            logger.error(
                f"Notification for application {application.id} to {_mask_email(email)} failed: {e}"
            )
            return False

        logger.info(
            f"Notified {_mask_email(email)} of application {application.id} status '{message.status}'"
        )
        return True


def disabled_notification_service() -> NotificationService:
    return NotificationService(channel=LogChannel(), enabled=False)
