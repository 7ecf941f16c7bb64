"""
Tests for the person create/update/delete rules: names uniqueness, names
immutability on the by-names path, shared addresses and the cascading delete.
"""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from conftest import medical_record_body, person_body
from safetynet_alerts.db import repository
from safetynet_alerts.db.models import Person
from safetynet_alerts.db.session import session_scope
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.write_service.processing import medical_records, persons


def test_create_person_round_trip(session):
    """A new person reads back with the exact address, city and zip it was created with."""
    result = persons.create_person(session, person_body())

    assert result.created is True
    person_id = result.entity["id"]
    assert persons.get_person(session, person_id) == {
        "id": person_id,
        "firstName": "John",
        "lastName": "Boyd",
        "address": "1509 Culver St",
        "city": "Culver",
        "zip": "97451",
        "phone": "841-874-6512",
        "email": "jaboyd@email.com",
    }


def test_get_unknown_person_returns_none(session):
    assert persons.get_person(session, 42) is None


def test_create_person_refuses_similar_names(session):
    persons.create_person(session, person_body())

    with pytest.raises(ServiceError) as error:
        persons.create_person(session, person_body(phone="000-000-0000"))

    assert error.value.kind is ErrorKind.ALREADY_EXISTS
    assert len(repository.find_persons_by_names(session, "John", "Boyd")) == 1


def test_create_person_allows_similar_names_when_asked(session):
    persons.create_person(session, person_body())
    result = persons.create_person(session, person_body(), allow_similar_names=True)

    assert result.created is True
    assert len(repository.find_persons_by_names(session, "John", "Boyd")) == 2


def test_residents_share_one_address_row(session):
    persons.create_person(session, person_body())
    persons.create_person(session, person_body(first_name="Jacob", phone="841-874-6513"))

    assert repository.count_addresses(session) == 1
    assert len(repository.find_persons_by_address(session, "1509 Culver St")) == 2


def test_create_person_with_interfering_address(session):
    persons.create_person(session, person_body())

    with pytest.raises(ServiceError) as error:
        persons.create_person(session, person_body(first_name="Jacob", city="Not Culver"))

    assert error.value.kind is ErrorKind.INTERFERING_ADDRESS


def test_update_person_by_id(session):
    person_id = persons.create_person(session, person_body()).entity["id"]

    result = persons.update_person(session, person_id, person_body(phone="111-111-1111"))

    assert result.created is False
    assert result.entity["phone"] == "111-111-1111"
    assert persons.get_person(session, person_id)["phone"] == "111-111-1111"


def test_update_person_by_id_can_rename(session):
    person_id = persons.create_person(session, person_body()).entity["id"]

    result = persons.update_person(session, person_id, person_body(first_name="Johnny"))

    assert result.entity["firstName"] == "Johnny"
    assert repository.find_persons_by_names(session, "John", "Boyd") == []


def test_update_person_by_id_rename_onto_existing_names(session):
    john_id = persons.create_person(session, person_body()).entity["id"]
    persons.create_person(session, person_body(first_name="Jacob"))

    with pytest.raises(ServiceError) as error:
        persons.update_person(session, john_id, person_body(first_name="Jacob"))
    assert error.value.kind is ErrorKind.ALREADY_EXISTS

    result = persons.update_person(
        session, john_id, person_body(first_name="Jacob"), allow_similar_names=True,
    )
    assert result.entity["firstName"] == "Jacob"


def test_update_unknown_person_by_id(session):
    with pytest.raises(ServiceError) as error:
        persons.update_person(session, 42, person_body())

    assert error.value.kind is ErrorKind.NOT_FOUND
    assert repository.count_persons(session) == 0


def test_update_person_by_names(session):
    persons.create_person(session, person_body())

    result = persons.update_person_by_names(session, "John", "Boyd", person_body(email="new@email.com"))

    assert result.created is False
    assert result.entity["email"] == "new@email.com"


def test_update_person_by_names_cannot_rename(session):
    persons.create_person(session, person_body())

    with pytest.raises(ServiceError) as error:
        persons.update_person_by_names(session, "John", "Boyd", person_body(first_name="Johnny"))

    assert error.value.kind is ErrorKind.IMMUTABLE_NAMES


def test_update_person_by_names_with_namesakes(session):
    """Two persons named Jean Sebastien: the names pair no longer identifies anybody."""
    body = person_body(first_name="Jean", last_name="Sebastien")
    persons.create_person(session, body)
    persons.create_person(session, body, allow_similar_names=True)

    with pytest.raises(ServiceError) as error:
        persons.update_person_by_names(session, "Jean", "Sebastien", body)

    assert error.value.kind is ErrorKind.INTERFERING_NAMES


def test_update_unknown_person_by_names(session):
    with pytest.raises(ServiceError) as error:
        persons.update_person_by_names(session, "Nobody", "Here", person_body())

    assert error.value.kind is ErrorKind.NOT_FOUND


def test_update_person_moves_to_new_address(session):
    person_id = persons.create_person(session, person_body()).entity["id"]

    persons.update_person(
        session, person_id,
        person_body(address="29 15th St", city="Culver", zip_code="97451"),
    )

    assert persons.get_person(session, person_id)["address"] == "29 15th St"
    # the old address stays behind
    assert repository.find_address(session, "1509 Culver St") is not None


def test_delete_person_deletes_medical_record(session):
    person_id = persons.create_person(session, person_body()).entity["id"]
    medical_records.create_medical_record(session, medical_record_body())

    assert persons.delete_person(session, person_id) is True

    assert repository.find_person(session, person_id) is None
    assert repository.find_medical_record(session, person_id) is None
    assert repository.find_address(session, "1509 Culver St") is not None


def test_delete_unknown_person(session):
    assert persons.delete_person(session, 42) is False
    assert persons.delete_person_by_names(session, "Nobody", "Here") is False


def test_delete_person_by_names(session):
    person_id = persons.create_person(session, person_body()).entity["id"]
    medical_records.create_medical_record(session, medical_record_body())

    assert persons.delete_person_by_names(session, "John", "Boyd") is True

    assert repository.find_person(session, person_id) is None
    assert repository.find_medical_record(session, person_id) is None


def test_delete_person_by_names_with_namesakes_rolls_back(session_factory):
    body = person_body(first_name="Jean", last_name="Sebastien")
    with session_scope(session_factory) as session:
        persons.create_person(session, body)
        persons.create_person(session, body, allow_similar_names=True)

    with pytest.raises(ServiceError) as error:
        with session_scope(session_factory) as session:
            persons.delete_person_by_names(session, "Jean", "Sebastien")
    assert error.value.kind is ErrorKind.INTERFERING_NAMES

    with session_scope(session_factory) as session:
        assert len(repository.find_persons_by_names(session, "Jean", "Sebastien")) == 2


def test_storage_failure_rolls_back_new_address(session_factory, mocker):
    """The address saved for a person is gone when saving the person itself fails."""
    real_save = repository.save

    def failing_save(session, entity):
        if isinstance(entity, Person):
            raise SQLAlchemyError("connection lost")
        return real_save(session, entity)

    mocker.patch.object(repository, "save", side_effect=failing_save)

    with pytest.raises(SQLAlchemyError):
        with session_scope(session_factory) as session:
            persons.create_person(session, person_body())

    with session_scope(session_factory) as session:
        assert repository.count_addresses(session) == 0
        assert repository.count_persons(session) == 0
