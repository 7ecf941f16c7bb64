"""
medical_records.py
Create, update and delete medical records. A medical record belongs to
exactly one person and shares that person's ID; a person has at most one.

Body dictionaries:
    birthdate (MM/dd/yyyy or None), medications, allergies
    personId, or firstName + lastName   (only read on create, to find the owner)
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.dates import parse_birthdate
from safetynet_alerts.db import repository
from safetynet_alerts.db.models import MedicalRecord
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.mappers import to_medical_record
from safetynet_alerts.write_service.processing.identity import deleted_one, resolve_one, resolve_person
from safetynet_alerts.write_service.processing.outcome import UpdateResult

logger = logging.getLogger(__name__)

MEDICAL_RECORD_NOT_FOUND = "Medical record not found"
MEDICAL_RECORD_EXISTS = "A medical record already exists for this person"
OWNER_NOT_FOUND = "The person linked to this medical file cannot be found"
INTERFERING_NAMES = "Multiple medical records share this names combination, use ID instead"


def get_medical_record(session: Session, person_id: int):
    return to_medical_record(repository.find_medical_record(session, person_id))


def create_medical_record(session: Session, body: dict):
    """
    Attach a new medical record to the person named by body["personId"], or
    else by body["firstName"] and body["lastName"].

    Raises PERSON_NOT_FOUND when no owner can be found, INTERFERING_NAMES when
    the names pair is ambiguous, ALREADY_EXISTS when the owner already has one.
    """
    person = resolve_person(
        session,
        person_id=body.get("personId"),
        first_name=body.get("firstName"),
        last_name=body.get("lastName"),
    )
    if person is None:
        raise ServiceError(ErrorKind.PERSON_NOT_FOUND, OWNER_NOT_FOUND)

    # one record per person, always enforced
    if repository.medical_record_exists(session, person.id):
        logger.warning("Person %s already has a medical record", person.id)
        raise ServiceError(ErrorKind.ALREADY_EXISTS, MEDICAL_RECORD_EXISTS)

    entity = MedicalRecord(person_id=person.id, person=person)
    return _apply(session, entity, body, create=True)


def update_medical_record(session: Session, person_id: int, body: dict):
    entity = repository.find_medical_record(session, person_id)
    if entity is None:
        raise ServiceError(ErrorKind.NOT_FOUND, MEDICAL_RECORD_NOT_FOUND)
    return _apply(session, entity, body, create=False)


def update_medical_record_by_names(session: Session, first_name: str, last_name: str, body: dict):
    matches = repository.find_medical_records_by_names(session, first_name, last_name)
    entity = resolve_one(matches, MEDICAL_RECORD_NOT_FOUND, INTERFERING_NAMES)
    return _apply(session, entity, body, create=False)


def delete_medical_record(session: Session, person_id: int):
    deleted = repository.delete_medical_record(session, person_id) != 0
    if deleted:
        logger.info("Deleted medical record %s", person_id)
    return deleted


def delete_medical_record_by_names(session: Session, first_name: str, last_name: str):
    """Returns False if nobody matches; raises INTERFERING_NAMES if several do."""
    count = repository.delete_medical_records_by_names(session, first_name, last_name)
    deleted = deleted_one(count, INTERFERING_NAMES)
    if deleted:
        logger.info("Deleted medical record of %s %s", first_name, last_name)
    return deleted


def _apply(session, entity, body, create):
    entity.birthdate = parse_birthdate(body.get("birthdate"))
    entity.medications = list(body.get("medications") or [])
    entity.allergies = list(body.get("allergies") or [])
    repository.save(session, entity)

    logger.info("%s medical record %s", "Created" if create else "Updated", entity.person_id)
    return UpdateResult(created=create, entity=to_medical_record(entity))
