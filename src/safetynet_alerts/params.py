"""
params.py
----------
Request helpers shared by the blueprints of both services.
Failures raise InvalidRequest / jsonschema.ValidationError, which the
handlers in errors.py turn into 400 VALIDATION_FAILED responses.
"""

from flask import request
from jsonschema import validate

from safetynet_alerts.errors import InvalidRequest


def required_arg(name):
    """Non-blank query parameter, or 400."""
    value = request.args.get(name)
    if value is None or not value.strip():
        raise InvalidRequest("must not be blank", parameter=name, constraint="NotBlank")
    return value


def required_list_arg(name):
    """
    Query parameter holding a list: accepts both ?name=1,2 and ?name=1&name=2.
    Blank items are dropped; an empty result is a 400.
    """
    values = []
    for raw in request.args.getlist(name):
        values.extend(item.strip() for item in raw.split(","))
    values = [value for value in values if value]
    if not values:
        raise InvalidRequest("must not be empty", parameter=name, constraint="NotEmpty")
    return values


TRUE_VALUES = ("true", "on", "yes", "1")
FALSE_VALUES = ("false", "off", "no", "0")


def flag_arg(name, default=False):
    """Boolean query parameter; absent or empty gives default, anything unrecognised is a 400."""
    value = request.args.get(name)
    if value is None or not value.strip():
        return default
    value = value.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise InvalidRequest("must be a boolean", parameter=name, constraint="Boolean")


def names_args():
    """The (firstName, lastName) pair of a by-names request."""
    return required_arg("firstName"), required_arg("lastName")


def json_body(schema):
    """Parsed JSON body, validated against schema."""
    body = request.get_json()
    validate(instance=body, schema=schema)
    return body
