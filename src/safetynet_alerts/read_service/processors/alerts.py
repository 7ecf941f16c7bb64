"""
alerts.py
Read-only views over persons, addresses and medical records, used by the
emergency alerts of the read service.

Every view is evaluated at one reference day `now` (defaults to today) so
ages stay consistent inside one response. A person whose age is unknown is
counted as an adult.

Persons come back in the order they were created; phone and email lists
keep the first occurrence of each value.
"""

import logging

from sqlalchemy.orm import Session

from safetynet_alerts.dates import is_adult, today
from safetynet_alerts.db import repository
from safetynet_alerts.mappers import to_complete_person

logger = logging.getLogger(__name__)


def _distinct(values):
    """Drop None and repeated values, keeping the first occurrence order."""
    seen = set()
    result = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def persons_covered_by_firestation(session: Session, station_number: str, now=None):
    """
    Persons living at an address covered by this station, with a count of
    adults and children among them.
    """
    now = now or today()
    persons = []
    adults_count = 0
    children_count = 0

    for entity in repository.find_persons_by_station(session, station_number):
        person = to_complete_person(entity, now)
        persons.append(person)
        if is_adult(person.get("age")):
            adults_count += 1
        else:
            children_count += 1

    logger.debug("Station %s covers %d persons", station_number, len(persons))
    return {
        "persons": persons,
        "adultsCount": adults_count,
        "childrenCount": children_count,
    }


def child_alert(session: Session, address: str, now=None):
    """Residents of an address, split into children (under 18) and adults."""
    now = now or today()
    children = []
    adults = []

    for entity in repository.find_persons_by_address(session, address):
        person = to_complete_person(entity, now)
        if is_adult(person.get("age")):
            adults.append(person)
        else:
            children.append(person)

    return {"children": children, "adults": adults}


def phone_alert(session: Session, station_number: str):
    persons = repository.find_persons_by_station(session, station_number)
    return {"phones": _distinct(person.phone for person in persons)}


def fire(session: Session, address: str, now=None):
    """
    Residents of an address with their medical details, and the station
    covering it. stationNumber is left out when the address is not covered.
    """
    now = now or today()
    result = {}

    address_entity = repository.find_address(session, address)
    if address_entity is not None and address_entity.firestation is not None:
        result["stationNumber"] = address_entity.firestation

    result["persons"] = [
        to_complete_person(entity, now, with_medical_records=True)
        for entity in repository.find_persons_by_address(session, address)
    ]
    return result


def flood_stations(session: Session, stations, now=None):
    """
    Households covered by any of these stations, grouped by address.
    Addresses nobody lives at are skipped.
    """
    now = now or today()
    entries = []

    for address_entity in repository.find_addresses_by_stations(session, stations):
        residents = repository.find_persons_by_address(session, address_entity.address)
        if not residents:
            continue
        entries.append({
            "address": address_entity.address,
            "persons": [
                to_complete_person(entity, now, with_medical_records=True)
                for entity in residents
            ],
        })

    return {"stations": entries}


def person_info(session: Session, first_name: str, last_name: str, now=None):
    """Every person with this names pair (namesakes included), with medical details."""
    now = now or today()
    return {
        "persons": [
            to_complete_person(entity, now, with_medical_records=True)
            for entity in repository.find_persons_by_names(session, first_name, last_name)
        ]
    }


def community_email(session: Session, city: str):
    persons = repository.find_persons_by_city(session, city)
    return {"emails": _distinct(person.email for person in persons)}
