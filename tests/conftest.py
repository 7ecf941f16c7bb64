# tests/conftest.py

from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from safetynet_alerts.db.session import create_tables, session_scope
from safetynet_alerts.write_service.processing import firestations, medical_records, persons

# Reference day used by every age computation in the tests
NOW = date(2024, 6, 1)


def person_body(first_name="John", last_name="Boyd", address="1509 Culver St",
                city="Culver", zip_code="97451", phone="841-874-6512",
                email="jaboyd@email.com"):
    return {
        "firstName": first_name,
        "lastName": last_name,
        "address": address,
        "city": city,
        "zip": zip_code,
        "phone": phone,
        "email": email,
    }


def medical_record_body(first_name="John", last_name="Boyd", birthdate="03/06/1984",
                        medications=None, allergies=None, person_id=None):
    body = {
        "firstName": first_name,
        "lastName": last_name,
        "birthdate": birthdate,
        "medications": ["aznol:350mg", "hydrapermazol:100mg"] if medications is None else medications,
        "allergies": ["nillacilan"] if allergies is None else allergies,
    }
    if person_id is not None:
        body["personId"] = person_id
    return body


@pytest.fixture
def engine():
    """
    A temporary database in memory, shared by every connection of the test
    (StaticPool), with all the tables created from the ORM models.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    create_tables(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def residents(session_factory):
    """
    A small directory of residents:

        1509 Culver St (station 3)  John Boyd (40), Tenley Boyd (12), Jacob Boyd (no record)
        29 15th St     (station 2)  Jonanathan Marrack (35)
        834 Binoc Ave  (station 3)  nobody lives here
        908 73rd St    (no station) Reginold Walker (44), city Paris
    """
    with session_scope(session_factory) as session:
        persons.create_person(session, person_body())
        persons.create_person(session, person_body(first_name="Tenley", email="tenz@email.com"))
        persons.create_person(session, person_body(first_name="Jacob", phone="841-874-6513", email="drk@email.com"))
        persons.create_person(session, person_body(
            first_name="Jonanathan", last_name="Marrack", address="29 15th St",
            phone="841-874-6513", email="drk@email.com",
        ))
        persons.create_person(session, person_body(
            first_name="Reginold", last_name="Walker", address="908 73rd St",
            city="Paris", zip_code="75000", phone="841-874-8547", email="reg@email.com",
        ))

        firestations.create_firestation(session, {"address": "1509 Culver St", "station": "3"})
        firestations.create_firestation(session, {"address": "29 15th St", "station": "2"})
        firestations.create_firestation(session, {"address": "834 Binoc Ave", "station": "3"})

        medical_records.create_medical_record(session, medical_record_body())
        medical_records.create_medical_record(session, medical_record_body(
            first_name="Tenley", birthdate="02/18/2012", medications=[], allergies=["peanut"],
        ))
        medical_records.create_medical_record(session, medical_record_body(
            first_name="Jonanathan", last_name="Marrack", birthdate="01/03/1989",
            medications=[], allergies=[],
        ))
        medical_records.create_medical_record(session, medical_record_body(
            first_name="Reginold", last_name="Walker", birthdate="08/30/1979",
            medications=["thradox:700mg"], allergies=["illisoxian"],
        ))
    return session_factory
