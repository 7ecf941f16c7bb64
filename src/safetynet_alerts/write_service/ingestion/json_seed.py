"""
json_seed.py
Loads the initial directory of residents from a JSON file into the database.

The file holds three collections (see schemas.SEED_SCHEMA):
    persons         person bodies; residents of one address share its row
    firestations    {"address", "station"} assignments
    medicalrecords  medical record bodies, owner found by firstName + lastName

Seeding only happens on an empty database (no address and no person), so
restarting the write service never duplicates data. Entries go through the
same functions as the HTTP endpoints, in a single unit of work: a file
that breaks a rule is not loaded at all.

Run on its own with: python -m safetynet_alerts.write_service.ingestion.json_seed
"""

import json
import logging

from jsonschema import validate

from safetynet_alerts.config import JSON_SEED_PATH, LOG_FORMAT, LOG_LEVEL
from safetynet_alerts.db import repository
from safetynet_alerts.db.session import create_tables, session_scope
from safetynet_alerts.write_service.processing import firestations, medical_records, persons
from safetynet_alerts.write_service.schemas import SEED_SCHEMA

logger = logging.getLogger(__name__)


def read_seed_file(path=None):
    """Read and validate the seed file. Raises jsonschema.ValidationError on a bad shape."""
    path = path or JSON_SEED_PATH
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    validate(instance=data, schema=SEED_SCHEMA)
    return data


def is_database_empty(session):
    return repository.count_addresses(session) == 0 and repository.count_persons(session) == 0


def seed_models(session, data):
    """
    Apply the seed collections inside the caller's session.
    Returns how many persons, firestations and medical records were applied.
    """
    for body in data["persons"]:
        # the seed may legitimately contain namesakes
        persons.create_person(session, body, allow_similar_names=True)

    for body in data["firestations"]:
        firestations.create_firestation(session, body)

    for body in data["medicalrecords"]:
        medical_records.create_medical_record(session, body)

    return {
        "persons": len(data["persons"]),
        "firestations": len(data["firestations"]),
        "medicalrecords": len(data["medicalrecords"]),
    }


def seed_database(session_factory=None, path=None):
    """
    Seed the database from the JSON file when it is empty.
    Returns the counts that were applied, or None when nothing was done.
    """
    with session_scope(session_factory) as session:
        if not is_database_empty(session):
            logger.info("Database already holds data, skipping JSON seed")
            return None

        data = read_seed_file(path)
        logger.info("Seeding database with %s", path or JSON_SEED_PATH)
        counts = seed_models(session, data)

    logger.info(
        "Seeded %(persons)d persons, %(firestations)d firestations, "
        "%(medicalrecords)d medical records", counts,
    )
    return counts


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    create_tables()
    seed_database()
