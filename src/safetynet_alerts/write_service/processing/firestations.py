"""
firestations.py
A firestation entry is the station number assigned to one address row.
Assigning a station to an address nobody lives at yet creates a placeholder
address (no city, no zip) that the first resident will complete.

Body dictionaries: {"address": ..., "station": ...}
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.db import repository
from safetynet_alerts.db.models import Address
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.mappers import to_firestation
from safetynet_alerts.write_service.processing.outcome import UpdateResult

logger = logging.getLogger(__name__)

IMMUTABLE_ADDRESS = "address cannot be updated"


def get_firestation(session: Session, address: str):
    """Return the firestation dict for this address, or None if the address is unknown."""
    return to_firestation(repository.find_address(session, address))


def create_firestation(session: Session, body: dict):
    """Assign body["station"] to body["address"], creating the address if needed."""
    entity = repository.find_address(session, body["address"])
    return _apply(session, entity, body["address"], body)


def update_firestation(session: Session, address: str, body: dict):
    """
    Assign a station to `address` (created when unknown).
    The body must name the same address: IMMUTABLE_ADDRESS otherwise.
    """
    entity = repository.find_address(session, address)
    return _apply(session, entity, address, body)


def delete_firestation(session: Session, address: str):
    """
    Remove the station assignment of an address. The address row itself stays.
    Returns False when the address is unknown or not covered.
    """
    entity = repository.find_address(session, address)
    if entity is None or entity.firestation is None:
        return False
    entity.firestation = None
    repository.save(session, entity)
    logger.info("Cleared firestation of %r", address)
    return True


def _apply(session, entity, address, body):
    create = entity is None
    if create:
        entity = Address(address=address)

    if body["address"] != entity.address:
        logger.warning("Refusing to move firestation from %r to %r", entity.address, body["address"])
        raise ServiceError(ErrorKind.IMMUTABLE_ADDRESS, IMMUTABLE_ADDRESS)

    entity.firestation = body["station"]
    repository.save(session, entity)

    logger.info("%s firestation %r -> %s", "Created" if create else "Updated", address, entity.firestation)
    return UpdateResult(created=create, entity=to_firestation(entity))
