"""
Database initialisation script
Creates the task store and seeds it with sample tasks when it is empty

Usage:
    python -m app.scripts.init_database
    task-manager-init-db
"""
import asyncio
import logging
from typing import Optional

from app.api.schemas.task import TaskCreate
from app.core.config import Settings, settings as default_settings
from app.core.database import Database
from app.core.logging_setup import setup_logging
from app.services.task import TaskService

logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    TaskCreate(
        title="Set up Jenkins environment",
        description="Configure the CI/CD pipeline in Jenkins",
        status="pending",
        priority="high",
    ),
    TaskCreate(
        title="Write unit tests",
        description="Cover every API endpoint with tests",
        status="in-progress",
        priority="medium",
    ),
    TaskCreate(
        title="Document the API",
        description="Write documentation for the endpoints",
        status="completed",
        priority="low",
    ),
]


async def init_database(settings: Optional[Settings] = None) -> int:
    """
    Create the database and insert sample tasks into an empty table

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings

    Returns:
        Number of sample tasks inserted (0 when the table already had data)
    """
    settings = settings or default_settings
    database = Database(settings.database_url, echo=settings.SQL_ECHO)
    logger.info(f"Initialising database at {settings.DATABASE_PATH}")

    await database.connect()
    try:
        async with database.session() as session:
            existing = await TaskService.count(session)
            if existing:
                logger.info(f"Database already contains {existing} tasks")
                return 0

            for task_data in SAMPLE_TASKS:
                task = await TaskService.create(session, task_data)
                logger.info(f"Inserted sample task '{task.title}'")

        logger.info(f"Inserted {len(SAMPLE_TASKS)} sample tasks")
        return len(SAMPLE_TASKS)
    finally:
        await database.dispose()


def main() -> None:
    """Console entry point"""
    setup_logging(default_settings.LOG_LEVEL)
    asyncio.run(init_database())


if __name__ == "__main__":
    main()
