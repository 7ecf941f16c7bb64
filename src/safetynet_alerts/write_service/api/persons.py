# src/safetynet_alerts/write_service/api/persons.py

from flask import Blueprint, jsonify, url_for

from safetynet_alerts.db.session import session_scope
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.params import flag_arg, json_body, names_args
from safetynet_alerts.write_service.processing import persons
from safetynet_alerts.write_service.schemas import PERSON_SCHEMA


def create_persons_blueprint(SessionLocal):
    """
    Factory that creates the persons blueprint with access to SessionLocal.

    Endpoints:
        GET    /person/<id>
        POST   /person                          ?allowSimilarNames=true|false
        PUT    /person/<id>                     ?allowSimilarNames=true|false
        PUT    /person?firstName=&lastName=
        DELETE /person/<id>
        DELETE /person?firstName=&lastName=

    Each request is one unit of work: any refused rule rolls everything back.
    """
    bp = Blueprint("persons", __name__)

    def _location(entity):
        return url_for("persons.get_person", person_id=entity["id"])

    @bp.route("/person/<int:person_id>", methods=["GET"])
    def get_person(person_id):
        with session_scope(SessionLocal) as session:
            person = persons.get_person(session, person_id)
        if person is None:
            raise ServiceError(ErrorKind.NOT_FOUND, persons.PERSON_NOT_FOUND)
        return jsonify(person), 200

    @bp.route("/person", methods=["POST"])
    def create_person():
        body = json_body(PERSON_SCHEMA)
        with session_scope(SessionLocal) as session:
            result = persons.create_person(
                session, body, allow_similar_names=flag_arg("allowSimilarNames"),
            )
        return jsonify(result.entity), 201, {"Location": _location(result.entity)}

    @bp.route("/person/<int:person_id>", methods=["PUT"])
    def update_person(person_id):
        body = json_body(PERSON_SCHEMA)
        with session_scope(SessionLocal) as session:
            result = persons.update_person(
                session, person_id, body, allow_similar_names=flag_arg("allowSimilarNames"),
            )
        return "", 204, {"Location": _location(result.entity)}

    @bp.route("/person", methods=["PUT"])
    def update_person_by_names():
        first_name, last_name = names_args()
        body = json_body(PERSON_SCHEMA)
        with session_scope(SessionLocal) as session:
            result = persons.update_person_by_names(session, first_name, last_name, body)
        return "", 204, {"Location": _location(result.entity)}

    @bp.route("/person/<int:person_id>", methods=["DELETE"])
    def delete_person(person_id):
        with session_scope(SessionLocal) as session:
            deleted = persons.delete_person(session, person_id)
        if not deleted:
            raise ServiceError(ErrorKind.NOT_FOUND, persons.PERSON_NOT_FOUND)
        return "", 204

    @bp.route("/person", methods=["DELETE"])
    def delete_person_by_names():
        first_name, last_name = names_args()
        with session_scope(SessionLocal) as session:
            deleted = persons.delete_person_by_names(session, first_name, last_name)
        if not deleted:
            raise ServiceError(ErrorKind.NOT_FOUND, persons.PERSON_NOT_FOUND)
        return "", 204

    return bp
