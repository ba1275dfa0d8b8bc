import logging
from sqlalchemy.engine import Engine
from tenacity import retry, stop_after_attempt, wait_fixed

from database.database import engine as default_engine
from database.models import Base

logger = logging.getLogger(__name__)


@retry(stop=stop_after_attempt(5), wait=wait_fixed(2), reraise=True)
def init_db(bind: Engine = default_engine) -> None:
    logger.info("Initializing database...")
    try:
        Base.metadata.create_all(bind=bind)
        logger.info("Tables created or verified.")
    except Exception as e:
        logger.error(f"Error initializing DB: {e}")
        raise


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    init_db()
