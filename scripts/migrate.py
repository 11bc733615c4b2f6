import argparse
import asyncio
import sys

from user_service.infrastructure.logging.logger import Logger, setup_logging
from user_service.infrastructure.persistence.database import create_tables, dispose_engine, get_engine

logger = Logger.get_logger(__name__)


async def migrate() -> None:
    try:
        await create_tables(get_engine())
    finally:
        await dispose_engine()


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the users table in DATABASE_URL")
    parser.add_argument("--log_level", type=str, default=None)
    args = parser.parse_args()
    setup_logging(args.log_level)

    logger.info("Starting database migration")
    try:
        asyncio.run(migrate())
    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)
    logger.info("Database migration completed")


if __name__ == "__main__":
    main()
