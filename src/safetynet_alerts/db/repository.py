"""
repository.py
--------------
Query functions over the three tables. Every function takes the SQLAlchemy
session of the caller, so the caller decides where the transaction starts
and ends. Nothing here commits.

Lookups return ORM objects (or None); deletes return the number of rows removed.
Storage errors (SQLAlchemyError) are left to propagate.
"""

from sqlalchemy import delete, exists, func, select
from sqlalchemy.orm import Session

from .models import Address, MedicalRecord, Person


# ---- addresses ----

def find_address(session: Session, address: str):
    """Return the Address row with this address string, or None."""
    return session.scalars(
        select(Address).where(Address.address == address)
    ).one_or_none()


def find_addresses_by_stations(session: Session, stations):
    """Return the addresses covered by any of the given station numbers."""
    return session.scalars(
        select(Address)
        .where(Address.firestation.in_(list(stations)))
        .order_by(Address.id)
    ).all()


def count_addresses(session: Session):
    return session.scalar(select(func.count()).select_from(Address))


# ---- persons ----

def find_person(session: Session, person_id: int):
    return session.get(Person, person_id)


def find_persons_by_names(session: Session, first_name: str, last_name: str):
    """Return every person with this (first_name, last_name) pair, oldest first."""
    return session.scalars(
        select(Person)
        .where(Person.first_name == first_name, Person.last_name == last_name)
        .order_by(Person.id)
    ).all()


def person_exists_by_names(session: Session, first_name: str, last_name: str, exclude_id=None):
    """
    Check whether a person with this names pair exists.
    exclude_id leaves one person out of the check (the one being renamed).
    """
    query = exists().where(Person.first_name == first_name, Person.last_name == last_name)
    if exclude_id is not None:
        query = query.where(Person.id != exclude_id)
    return session.scalar(select(query))


def find_persons_by_address(session: Session, address: str):
    return session.scalars(
        select(Person)
        .join(Person.address)
        .where(Address.address == address)
        .order_by(Person.id)
    ).all()


def find_persons_by_station(session: Session, station: str):
    return session.scalars(
        select(Person)
        .join(Person.address)
        .where(Address.firestation == station)
        .order_by(Person.id)
    ).all()


def find_persons_by_city(session: Session, city: str):
    return session.scalars(
        select(Person)
        .join(Person.address)
        .where(Address.city == city)
        .order_by(Person.id)
    ).all()


def count_persons(session: Session):
    return session.scalar(select(func.count()).select_from(Person))


def delete_person(session: Session, person_id: int):
    """Delete one person row. Its medical record must already be gone."""
    result = session.execute(
        delete(Person)
        .where(Person.id == person_id)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


def delete_persons_by_names(session: Session, first_name: str, last_name: str):
    result = session.execute(
        delete(Person)
        .where(Person.first_name == first_name, Person.last_name == last_name)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


# ---- medical records ----

def find_medical_record(session: Session, person_id: int):
    return session.get(MedicalRecord, person_id)


def find_medical_records_by_names(session: Session, first_name: str, last_name: str):
    """Return the medical records whose owner has this names pair."""
    return session.scalars(
        select(MedicalRecord)
        .join(MedicalRecord.person)
        .where(Person.first_name == first_name, Person.last_name == last_name)
        .order_by(MedicalRecord.person_id)
    ).all()


def medical_record_exists(session: Session, person_id: int):
    return session.scalar(select(exists().where(MedicalRecord.person_id == person_id)))


def delete_medical_record(session: Session, person_id: int):
    result = session.execute(
        delete(MedicalRecord)
        .where(MedicalRecord.person_id == person_id)
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


def delete_medical_records_by_names(session: Session, first_name: str, last_name: str):
    owners = select(Person.id).where(Person.first_name == first_name, Person.last_name == last_name)
    result = session.execute(
        delete(MedicalRecord)
        .where(MedicalRecord.person_id.in_(owners))
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount


def save(session: Session, entity):
    """Insert-or-update by primary key, then flush so generated ids are set."""
    session.add(entity)
    session.flush()
    return entity
