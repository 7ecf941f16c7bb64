"""
identity.py
Resolves a natural key (a first/last names pair) to exactly one row.

The same 0/1/N rule applies wherever a names pair is the identifying key:
    0 matches  -> not found
    1 match    -> that row
    N matches  -> INTERFERING_NAMES (the caller has to use the ID instead)
N is counted, rows are never compared: two identical persons still interfere.
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.db import repository
from safetynet_alerts.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def resolve_one(matches, not_found_message, interfering_message):
    """Apply the 0/1/N rule to the rows matched by a names pair."""
    if not matches:
        raise ServiceError(ErrorKind.NOT_FOUND, not_found_message)
    if len(matches) > 1:
        logger.warning("%d rows share one names pair: %s", len(matches), interfering_message)
        raise ServiceError(ErrorKind.INTERFERING_NAMES, interfering_message)
    return matches[0]


def deleted_one(count, interfering_message):
    """
    Apply the 0/1/N rule to the row count of a delete by names pair.
    Returns False when nothing matched. Raising on N makes the surrounding
    unit of work roll the deletes back.
    """
    if count > 1:
        logger.warning("Delete matched %d rows: %s", count, interfering_message)
        raise ServiceError(ErrorKind.INTERFERING_NAMES, interfering_message)
    return count == 1


def resolve_person(session: Session, person_id=None, first_name=None, last_name=None):
    """
    Find the person targeted by an ID, or else by a names pair.
    Returns None when neither key is usable or nothing matches.
    Raises INTERFERING_NAMES when the names pair matches several persons.
    """
    if person_id is not None:
        return repository.find_person(session, person_id)
    if first_name is not None and last_name is not None:
        matches = repository.find_persons_by_names(session, first_name, last_name)
        if not matches:
            return None
        return resolve_one(
            matches, None,
            "Multiple persons share this names combination, use ID instead",
        )
    return None
