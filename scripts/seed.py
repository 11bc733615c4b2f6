import argparse
import sys
from typing import List

import requests

from user_service.infrastructure.logging.logger import Logger, setup_logging

logger = Logger.get_logger(__name__)

SAMPLE_USERS: List[dict] = [
    {"name": "John Doe", "email": "john.doe@example.com", "age": 30, "department": "Engineering", "salary": 75000},
    {"name": "Jane Smith", "email": "jane.smith@example.com", "age": 28, "department": "Marketing", "salary": 65000},
    {"name": "Mike Johnson", "email": "mike.johnson@example.com", "age": 35, "department": "Engineering", "salary": 85000},
    {"name": "Sarah Wilson", "email": "sarah.wilson@example.com", "age": 32, "department": "HR", "salary": 55000},
    {"name": "David Brown", "email": "david.brown@example.com", "age": 29, "department": "Sales", "salary": 60000},
    {"name": "Lisa Davis", "email": "lisa.davis@example.com", "age": 27, "department": "Marketing", "salary": 58000},
    {"name": "Robert Miller", "email": "robert.miller@example.com", "age": 40, "department": "Engineering", "salary": 95000},
    {"name": "Emily Garcia", "email": "emily.garcia@example.com", "age": 26, "department": "Design", "salary": 62000},
]


def seed_users(base_url: str, users: List[dict], dry_run: bool, timeout: float) -> int:
    url = base_url.rstrip("/") + "/users/"
    created = 0
    for payload in users:
        if dry_run:
            logger.info("Would create user: %s", payload["email"])
            continue
        try:
            r = requests.post(url, json=payload, timeout=timeout)
            if r.status_code == 409:
                logger.warning("User already exists: %s", payload["email"])
                continue
            r.raise_for_status()
            created += 1
            logger.info("Created user: %s (%s)", payload["name"], payload["email"])
        except requests.RequestException as e:
            logger.error("Failed to create user %s: %s", payload["email"], e)
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed sample users through the HTTP API")
    parser.add_argument("--base_url", type=str, default="http://localhost:8000/api/v1")
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--dry_run", action="store_true")
    args = parser.parse_args()
    setup_logging()

    try:
        created = seed_users(args.base_url, SAMPLE_USERS, args.dry_run, args.timeout)
    except Exception:
        logger.exception("Seeding failed")
        sys.exit(1)
    logger.info("Seeding completed: %s users created", created)


if __name__ == "__main__":
    main()
