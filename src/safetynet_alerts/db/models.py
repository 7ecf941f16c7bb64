"""
models.py
----------
Defines the PostgreSQL tables using SQLAlchemy ORM.
Each class here represents one table in the database.

    addresses        one row per distinct address string (shared by residents)
    persons          residents, each living at exactly one address
    medical_records  at most one per person, keyed by the person's id
"""

from sqlalchemy import JSON, Column, Date, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .session import Base


class Address(Base):
    """
    An address, optionally covered by a firestation.

    The address string is the natural key. city and zip may be missing when
    the row was created by a firestation assignment before anybody lived there.
    """
    __tablename__ = "addresses"

    id = Column(Integer, primary_key=True, autoincrement=True)

    address = Column(String(255), nullable=False)
    city = Column(String(128))
    zip = Column(String(16))

    # Station number covering this address; NULL means not covered
    firestation = Column(String(16), index=True)

    residents = relationship("Person", back_populates="address")

    __table_args__ = (
        UniqueConstraint("address", name="uq_addresses_address"),
    )

    @property
    def is_complete(self):
        return self.city is not None and self.zip is not None

    def __repr__(self):
        return f"<Address {self.address!r} station={self.firestation!r}>"


class Person(Base):
    """A resident. (first_name, last_name) is not unique at the table level."""
    __tablename__ = "persons"

    id = Column(Integer, primary_key=True, autoincrement=True)

    first_name = Column(String(128), nullable=False, index=True)
    last_name = Column(String(128), nullable=False, index=True)

    # Saving a person also saves a new address attached to it
    address_id = Column(Integer, ForeignKey("addresses.id"), nullable=False)
    address = relationship("Address", back_populates="residents")

    phone = Column(String(32), nullable=False)
    email = Column(String(255), nullable=False)

    medical_record = relationship("MedicalRecord", back_populates="person", uselist=False)

    def __repr__(self):
        return f"<Person {self.id} {self.first_name} {self.last_name}>"


class MedicalRecord(Base):
    """
    Medical record of a person. Shares its primary key with the owning person.
    medications are "name:dose" strings; both lists keep their order.
    """
    __tablename__ = "medical_records"

    person_id = Column(Integer, ForeignKey("persons.id"), primary_key=True, autoincrement=False)
    person = relationship("Person", back_populates="medical_record")

    birthdate = Column(Date)
    medications = Column(JSON, nullable=False, default=list)
    allergies = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<MedicalRecord {self.person_id}>"
