"""
persons.py
Create, update and delete persons while keeping their shared address rows
and their medical records consistent.

Every function works inside the caller's session and never commits; run
each call in its own unit of work (see db.session.session_scope) so a refused
operation leaves nothing behind.

Body dictionaries use the public field names:
    firstName, lastName, address, city, zip, phone, email  (id is ignored)
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.db import repository
from safetynet_alerts.db.models import Person
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.mappers import to_person
from safetynet_alerts.write_service.processing.addresses import reconcile_address
from safetynet_alerts.write_service.processing.identity import deleted_one, resolve_one
from safetynet_alerts.write_service.processing.outcome import UpdateResult

logger = logging.getLogger(__name__)

PERSON_NOT_FOUND = "Person not found"
PERSON_EXISTS = "A person with a similar names combination already exists"
IMMUTABLE_NAMES = "firstName and lastName cannot be updated in this context, use ID instead"
INTERFERING_NAMES = "Multiple persons share this names combination, use ID instead"


def get_person(session: Session, person_id: int):
    """Return the person dict for this ID, or None."""
    return to_person(repository.find_person(session, person_id))


def create_person(session: Session, body: dict, allow_similar_names: bool = False):
    """
    Insert a new person.

    Raises ALREADY_EXISTS when somebody already has the same names pair and
    allow_similar_names is False, INTERFERING_ADDRESS when the address is
    already known with another city/zip.
    """
    return _apply(session, None, body, allow_similar_names, allow_rename=True)


def update_person(session: Session, person_id: int, body: dict, allow_similar_names: bool = False):
    """
    Update the person with this ID. Renaming is allowed on this path; the new
    names pair is checked for duplicates unless allow_similar_names is True.
    Raises NOT_FOUND when no person has this ID.
    """
    entity = repository.find_person(session, person_id)
    if entity is None:
        raise ServiceError(ErrorKind.NOT_FOUND, PERSON_NOT_FOUND)
    return _apply(session, entity, body, allow_similar_names, allow_rename=True)


def update_person_by_names(session: Session, first_name: str, last_name: str, body: dict):
    """
    Update the only person with this names pair. The names used to find the
    person cannot be changed here (IMMUTABLE_NAMES).
    """
    matches = repository.find_persons_by_names(session, first_name, last_name)
    entity = resolve_one(matches, PERSON_NOT_FOUND, INTERFERING_NAMES)
    return _apply(session, entity, body, allow_similar_names=False, allow_rename=False)


def delete_person(session: Session, person_id: int):
    """Delete a person and its medical record. Returns False if the ID is unknown."""
    repository.delete_medical_record(session, person_id)
    deleted = repository.delete_person(session, person_id) != 0
    if deleted:
        logger.info("Deleted person %s", person_id)
    return deleted


def delete_person_by_names(session: Session, first_name: str, last_name: str):
    """
    Delete the only person with this names pair, and its medical record.
    Returns False if nobody matches; raises INTERFERING_NAMES if several do.
    """
    repository.delete_medical_records_by_names(session, first_name, last_name)
    count = repository.delete_persons_by_names(session, first_name, last_name)
    deleted = deleted_one(count, INTERFERING_NAMES)
    if deleted:
        logger.info("Deleted person %s %s", first_name, last_name)
    return deleted


def _apply(session, entity, body, allow_similar_names, allow_rename):
    """Shared create-or-update path; entity is None on create."""
    create = entity is None
    first_name = body["firstName"]
    last_name = body["lastName"]
    renamed = not create and (entity.first_name, entity.last_name) != (first_name, last_name)

    if renamed and not allow_rename:
        raise ServiceError(ErrorKind.IMMUTABLE_NAMES, IMMUTABLE_NAMES)

    # names pair uniqueness, unless the caller opted out
    if (create or renamed) and not allow_similar_names:
        exclude_id = None if create else entity.id
        if repository.person_exists_by_names(session, first_name, last_name, exclude_id=exclude_id):
            logger.warning("Refusing duplicate names %s %s", first_name, last_name)
            raise ServiceError(ErrorKind.ALREADY_EXISTS, PERSON_EXISTS)

    address = reconcile_address(session, body["address"], body["city"], body["zip"])

    if create:
        entity = Person()
    entity.first_name = first_name
    entity.last_name = last_name
    entity.address = address
    entity.phone = body["phone"]
    entity.email = body["email"]
    repository.save(session, entity)

    logger.info("%s person %s", "Created" if create else "Updated", entity.id)
    return UpdateResult(created=create, entity=to_person(entity))
