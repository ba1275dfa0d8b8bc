from typing import Any, Dict

from pydantic import BaseModel

from core.models import Application, ApplicationStatus


class StatusChangeMessage(BaseModel):
    """Body of the status-change request sent to the mail webhook."""
    email: str
    status: str

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class NotificationMessageBuilder:
    @staticmethod
    def build_status_change(email: str, status: ApplicationStatus) -> StatusChangeMessage:
        return StatusChangeMessage(email=email, status=ApplicationStatus.parse(status).value.lower())

    @staticmethod
    def subject_for(application: Application) -> str:
        return f"Your application is now {application.status.value}"
