"""
Notification Module

Best-effort notifications sent to volunteers when an organization changes
the status of their application.

Usage:
    from notification import NotificationService, NotificationChannelFactory

    service = NotificationService(NotificationChannelFactory.get_channel('log'))
    service.notify_status_change('volunteer@example.com', application)
"""

from notification.channels import (
    NotificationChannel,
    WebhookChannel,
    LogChannel,
    NotificationChannelFactory,
)

from notification.message_builder import (
    StatusChangeMessage,
    NotificationMessageBuilder,
)

from notification.service import (
    NotificationService,
    disabled_notification_service,
)

__all__ = [
    # Channels
    'NotificationChannel',
    'WebhookChannel',
    'LogChannel',
    'NotificationChannelFactory',
    # Messages
    'StatusChangeMessage',
    'NotificationMessageBuilder',
    # Service
    'NotificationService',
    'disabled_notification_service',
]
