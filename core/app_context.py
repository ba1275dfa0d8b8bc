import logging
from dataclasses import dataclass
from functools import partial
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.applications import ApplicationService
from core.clock import Clock, SystemClock
from core.config_loader import AppConfig, load_config
from core.dashboard import DashboardService
from core.positions import PositionService
from core.profiles import ProfileService
from core.scorer import ScoringService
from database.database import make_engine, make_session_factory
from database.init_db import init_db
from database.uow import record_uow
from notification.service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    Services share one session factory. Each service operation opens its
    own unit of work through ``uow``.
    """
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    clock: Clock
    scorer: ScoringService
    profiles: ProfileService
    positions: PositionService
    applications: ApplicationService
    dashboard: DashboardService
    notification_service: Optional[NotificationService] = None

    @classmethod
    def build(
        cls,
        config: Optional[AppConfig] = None,
        clock: Optional[Clock] = None,
        engine: Optional[Engine] = None,
        create_schema: bool = True
    ) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration (``load_config()`` if omitted)
            clock: Time source; the system clock if omitted
            engine: Existing engine to reuse, e.g. an in-memory SQLite engine
            create_schema: Create the record table if it does not exist

        Returns:
            Fully wired AppContext instance
        """
        config = config or load_config()
        clock = clock or SystemClock()

        engine = engine or make_engine(config.database.url, echo=config.database.echo)
        if create_schema:
            init_db(engine)
        session_factory = make_session_factory(engine)
        uow = partial(record_uow, session_factory)

        scorer = ScoringService(config.matching.scorer)

        # Notification Service (only if enabled)
        notification_service = None
        if config.notifications and config.notifications.enabled:
            notification_service = NotificationService.from_config(config.notifications)

        context = cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            clock=clock,
            scorer=scorer,
            profiles=ProfileService(uow=uow, clock=clock, catalog=config.catalog),
            positions=PositionService(
                uow=uow,
                clock=clock,
                catalog=config.catalog,
                limits=config.positions,
                scorer=scorer,
            ),
            applications=ApplicationService(uow=uow, clock=clock, notifier=notification_service),
            dashboard=DashboardService(uow=uow, clock=clock, scorer=scorer, config=config.matching),
            notification_service=notification_service,
        )
        logger.info(f"Application context ready (database: {engine.url.render_as_string(hide_password=True)})")
        return context

    def uow(self):
        return record_uow(self.session_factory)
