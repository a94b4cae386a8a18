#!/usr/bin/env python3
"""
Seed the people table with the sample records.

Inserts the sample batch with create_many_people, then the fixed sample
person with create_and_save_person, and logs the outcome of each step.

Usage:
    PEOPLE_TABLE=people-dev python scripts/seed_people.py
"""
import os
import sys
import logging

# Add the source directory to the Python path
sys.path.append(os.path.join(os.path.dirname(__file__), '../src'))

from services import person_service
from utils.db.people import SAMPLE_PEOPLE

# Configure logging with more detailed format
logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO').upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def report(step: str):
    def done(err, result=None):
        if err:
            logger.error(f"Error in {step}: {err}")
            return False
        logger.info(f"{step} succeeded: {result}")
        return True
    return done


def main() -> int:
    if not os.environ.get('PEOPLE_TABLE'):
        logger.error("PEOPLE_TABLE environment variable is not set")
        return 1

    logger.info(f"Seeding people table {os.environ['PEOPLE_TABLE']}")
    ok = person_service.create_many_people(SAMPLE_PEOPLE, report("create_many_people"))
    ok = person_service.create_and_save_person(report("create_and_save_person")) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
