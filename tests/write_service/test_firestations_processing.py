"""
Tests for firestation assignments: upsert on create/update, immutable address,
clearing the station on delete, and placeholder addresses adopted by residents.
"""

import pytest

from conftest import person_body
from safetynet_alerts.db import repository
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.write_service.processing import firestations, persons


def test_create_firestation_for_unknown_address(session):
    result = firestations.create_firestation(session, {"address": "X", "station": "1"})

    assert result.created is True
    assert result.entity == {"address": "X", "station": "1"}

    address = repository.find_address(session, "X")
    assert address.city is None
    assert address.zip is None
    assert address.is_complete is False


def test_create_firestation_for_known_address_updates_it(session):
    persons.create_person(session, person_body())

    result = firestations.create_firestation(session, {"address": "1509 Culver St", "station": "3"})

    assert result.created is False
    assert firestations.get_firestation(session, "1509 Culver St") == {
        "address": "1509 Culver St", "station": "3",
    }
    assert repository.count_addresses(session) == 1


def test_get_unknown_firestation(session):
    assert firestations.get_firestation(session, "Nowhere") is None


def test_get_firestation_without_station(session):
    persons.create_person(session, person_body())

    assert firestations.get_firestation(session, "1509 Culver St") == {"address": "1509 Culver St"}


def test_update_firestation(session):
    firestations.create_firestation(session, {"address": "X", "station": "1"})

    result = firestations.update_firestation(session, "X", {"address": "X", "station": "2"})

    assert result.created is False
    assert result.entity["station"] == "2"


def test_update_firestation_cannot_change_address(session):
    firestations.create_firestation(session, {"address": "X", "station": "1"})

    with pytest.raises(ServiceError) as error:
        firestations.update_firestation(session, "X", {"address": "Y", "station": "1"})

    assert error.value.kind is ErrorKind.IMMUTABLE_ADDRESS
    assert repository.find_address(session, "Y") is None


def test_update_firestation_for_unknown_address_creates_it(session):
    result = firestations.update_firestation(session, "X", {"address": "X", "station": "4"})

    assert result.created is True
    assert firestations.get_firestation(session, "X") == {"address": "X", "station": "4"}


def test_delete_firestation_keeps_address(session):
    persons.create_person(session, person_body())
    firestations.create_firestation(session, {"address": "1509 Culver St", "station": "3"})

    assert firestations.delete_firestation(session, "1509 Culver St") is True

    address = repository.find_address(session, "1509 Culver St")
    assert address is not None
    assert address.firestation is None
    assert len(repository.find_persons_by_address(session, "1509 Culver St")) == 1


def test_delete_unknown_firestation(session):
    assert firestations.delete_firestation(session, "Nowhere") is False


def test_delete_firestation_twice(session):
    firestations.create_firestation(session, {"address": "X", "station": "1"})

    assert firestations.delete_firestation(session, "X") is True
    assert firestations.delete_firestation(session, "X") is False


def test_first_resident_completes_placeholder_address(session):
    firestations.create_firestation(session, {"address": "1509 Culver St", "station": "3"})

    persons.create_person(session, person_body())

    address = repository.find_address(session, "1509 Culver St")
    assert address.is_complete
    assert (address.city, address.zip, address.firestation) == ("Culver", "97451", "3")
    assert repository.count_addresses(session) == 1
