"""
schemas.py
JSON Schemas for the request bodies of the write service and for the seed
file. Only shape, type and required fields are checked here; the business
rules live in write_service.processing.
"""

_STRING = {"type": "string"}
_STRING_LIST = {"type": "array", "items": {"type": "string"}}

PERSON_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": ["integer", "null"]},
        "firstName": _STRING,
        "lastName": _STRING,
        "address": _STRING,
        "city": _STRING,
        "zip": _STRING,
        "phone": _STRING,
        "email": _STRING,
    },
    "required": ["firstName", "lastName", "address", "city", "zip", "phone", "email"],
}

FIRESTATION_SCHEMA = {
    "type": "object",
    "properties": {
        "address": _STRING,
        "station": _STRING,
    },
    "required": ["address", "station"],
}

MEDICAL_RECORD_SCHEMA = {
    "type": "object",
    "properties": {
        "personId": {"type": ["integer", "null"]},
        "firstName": _STRING,
        "lastName": _STRING,
        "birthdate": {
            "type": ["string", "null"],
            "pattern": r"^\d{2}/\d{2}/\d{4}$",
        },
        "medications": _STRING_LIST,
        "allergies": _STRING_LIST,
    },
    "required": ["birthdate", "medications", "allergies"],
}

# Seed entries are the same bodies, grouped by collection
SEED_SCHEMA = {
    "type": "object",
    "properties": {
        "persons": {"type": "array", "items": PERSON_SCHEMA},
        "firestations": {"type": "array", "items": FIRESTATION_SCHEMA},
        "medicalrecords": {
            "type": "array",
            "items": {
                **MEDICAL_RECORD_SCHEMA,
                "required": ["firstName", "lastName", "birthdate", "medications", "allergies"],
            },
        },
    },
    "required": ["persons", "firestations", "medicalrecords"],
}
