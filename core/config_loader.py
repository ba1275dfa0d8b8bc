import yaml
import os
from typing import List, Optional
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = "config.yaml"


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///volunteer_match.db"
    echo: bool = False


class CatalogConfig(BaseModel):
    """
    Fixed enumerations used for matching.

    Membership is configuration; the scorer only compares values.
    """
    skills: List[str] = Field(default_factory=lambda: [
        "teaching", "fundraising", "medicalAid", "eventManagement",
    ])
    causes: List[str] = Field(default_factory=lambda: [
        "education", "health", "environment", "womenEmpowerment",
    ])
    availability: List[str] = Field(default_factory=lambda: [
        "weekdays", "weekends", "evenings", "fullTime",
    ])
    locations: List[str] = Field(default_factory=lambda: [
        "delhi", "mumbai", "bangalore", "kolkata",
    ])
    min_urgency: int = 1
    max_urgency: int = 5


class ScorerConfig(BaseModel):
    """
    Weights for the relevance score.

    score = w_skills * skill_match + w_cause * cause_match
          + w_availability * availability_match + w_proximity * proximity_match
          + w_urgency * urgency_score
    """
    weight_skills: float = 0.40
    weight_cause: float = 0.25
    weight_availability: float = 0.20
    weight_proximity: float = 0.10
    weight_urgency: float = 0.05

    # Urgency 1-5 maps onto 20-100
    urgency_multiplier: float = 20.0


class MatchingConfig(BaseModel):
    scorer: ScorerConfig = Field(default_factory=ScorerConfig)
    recommendation_limit: int = 3  # Top-N shown on the volunteer dashboard
    recent_limit: int = 3


class PositionConfig(BaseModel):
    default_valid_for_days: int = 30
    max_valid_for_days: int = 365


class NotificationConfig(BaseModel):
    """
    Configuration for application status notifications.

    Delivery is best-effort: a failed send never affects the status change.
    """
    enabled: bool = True
    channel: str = "webhook"  # webhook | log
    webhook_url: Optional[str] = None
    timeout_seconds: float = 5.0


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    positions: PositionConfig = Field(default_factory=PositionConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:
    # If not found at relative path (e.g. running from root), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", DEFAULT_CONFIG_PATH)

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    # Allow env var override for the notification webhook
    env_webhook_url = os.environ.get("NOTIFICATION_WEBHOOK_URL")
    if env_webhook_url:
        if not data.get('notifications'):
            data['notifications'] = {}
        data['notifications']['webhook_url'] = env_webhook_url

    return AppConfig(**data)
