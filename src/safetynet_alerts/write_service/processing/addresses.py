"""
addresses.py
Reconciles the (address, city, zip) claimed by a person with the shared
address row of the same address string.

    no row                  -> create it with the claimed city/zip
    row without city or zip -> adopt it and fill in the claimed city/zip
    complete row            -> claimed city/zip must be equal, else INTERFERING_ADDRESS

The first complete claim wins; later claims must agree with it.
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.db import repository
from safetynet_alerts.db.models import Address
from safetynet_alerts.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def reconcile_address(session: Session, address: str, city: str, zip_code: str):
    """Return the Address row a person with these claims should point to."""
    entity = repository.find_address(session, address)

    if entity is None:
        logger.info("Creating address %r", address)
        entity = Address(address=address, city=city, zip=zip_code)
        return repository.save(session, entity)

    if not entity.is_complete:
        logger.info("Completing address %r with city=%r zip=%r", address, city, zip_code)
        entity.city = city
        entity.zip = zip_code
        return repository.save(session, entity)

    if entity.city != city or entity.zip != zip_code:
        logger.warning(
            "Address %r is %r/%r, refusing %r/%r",
            address, entity.city, entity.zip, city, zip_code,
        )
        raise ServiceError(
            ErrorKind.INTERFERING_ADDRESS,
            "A matching address already exists with a different city/zip combination",
        )
    return entity
