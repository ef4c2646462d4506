"""
Create the Jobly tables on the configured database.

Run this from the project root:
    python init_db.py           # create tables
    python init_db.py --seed    # create tables and load sample companies and jobs

The database comes from DB_URL or the POSTGRES_* settings (see app/core/config.py).
"""

import argparse
import logging

from app.core.config import settings
from app.core.database import get_db, init_db
from app.core.exceptions import BadRequestError
from app.core.logging_config import setup_logging
from app.crud import company as company_crud
from app.crud import job as job_crud

logger = logging.getLogger(__name__)

SAMPLE_COMPANIES = [
    {
        "handle": "anderson-arias-morrow",
        "name": "Anderson, Arias and Morrow",
        "description": "Somebody program how I. Face give away discussion view act inside.",
        "numEmployees": 245,
        "logoUrl": "/logos/logo3.png",
    },
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "description": "Difficult ready trip question produce produce someone.",
        "numEmployees": 862,
        "logoUrl": None,
    },
    {
        "handle": "watson-davis",
        "name": "Watson-Davis",
        "description": "Year join loss.",
        "numEmployees": 819,
        "logoUrl": "/logos/logo3.png",
    },
]

SAMPLE_JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": 0.0, "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": 0.0, "companyHandle": "anderson-arias-morrow"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": 0.0, "companyHandle": "bauer-gallagher"},
]


def seed() -> None:
    """Load the sample data, skipping companies that already exist."""
    with get_db() as db:
        for data in SAMPLE_COMPANIES:
            try:
                company_crud.create(db, data)
            except BadRequestError:
                logger.info(f"Company {data['handle']} already present, skipping its jobs")
                continue
            for job in SAMPLE_JOBS:
                if job["companyHandle"] == data["handle"]:
                    job_crud.create(db, job)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Jobly database tables")
    parser.add_argument("--seed", action="store_true", help="load sample companies and jobs")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS, sql_echo=settings.SQL_ECHO)

    logger.info("Creating tables...")
    init_db()
    logger.info("Tables ready")

    if args.seed:
        seed()
        logger.info("Sample data loaded")


if __name__ == "__main__":
    main()
