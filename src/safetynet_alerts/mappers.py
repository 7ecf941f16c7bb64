"""
mappers.py
-----------
Turns ORM rows into the JSON-ready dictionaries returned by both services.
Keys use the public camelCase names; None values are left out.
"""

from safetynet_alerts.dates import calculate_age, format_birthdate


def _without_none(data):
    return {key: value for key, value in data.items() if value is not None}


def to_person(entity):
    """Person row -> person dict (address, city and zip come from its address row)."""
    if entity is None:
        return None
    address = entity.address
    return _without_none({
        "id": entity.id,
        "firstName": entity.first_name,
        "lastName": entity.last_name,
        "address": address.address,
        "city": address.city,
        "zip": address.zip,
        "phone": entity.phone,
        "email": entity.email,
    })


def to_complete_person(entity, now, with_medical_records=False):
    """
    Person row -> person dict enriched from its medical record:
    birthdate, age at `now`, and (when asked) medications and allergies.
    """
    if entity is None:
        return None
    result = to_person(entity)
    record = entity.medical_record
    if record is not None:
        result.update(_without_none({
            "birthdate": format_birthdate(record.birthdate),
            "age": calculate_age(record.birthdate, now) if now is not None else None,
        }))
        if with_medical_records:
            result["medications"] = list(record.medications or [])
            result["allergies"] = list(record.allergies or [])
    return result


def to_firestation(entity):
    """Address row -> firestation dict ({"address", "station"})."""
    if entity is None:
        return None
    return _without_none({
        "address": entity.address,
        "station": entity.firestation,
    })


def to_medical_record(entity):
    if entity is None:
        return None
    person = entity.person
    return _without_none({
        "personId": entity.person_id,
        "firstName": person.first_name,
        "lastName": person.last_name,
        "birthdate": format_birthdate(entity.birthdate),
        "medications": list(entity.medications or []),
        "allergies": list(entity.allergies or []),
    })
