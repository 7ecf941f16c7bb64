# src/safetynet_alerts/write_service/api/medical_records.py

from flask import Blueprint, jsonify, url_for

from safetynet_alerts.dates import parse_birthdate
from safetynet_alerts.db.session import session_scope
from safetynet_alerts.errors import ErrorKind, InvalidRequest, ServiceError
from safetynet_alerts.params import json_body, names_args
from safetynet_alerts.write_service.processing import medical_records
from safetynet_alerts.write_service.schemas import MEDICAL_RECORD_SCHEMA


def _medical_record_body():
    body = json_body(MEDICAL_RECORD_SCHEMA)
    # the schema only checks the MM/dd/yyyy shape; 13/45/2000 is caught here
    try:
        parse_birthdate(body.get("birthdate"))
    except ValueError:
        raise InvalidRequest("must be a valid MM/dd/yyyy date", parameter="birthdate", constraint="IsDate")
    return body


def create_medical_records_blueprint(SessionLocal):
    """
    Factory that creates the medical records blueprint with access to SessionLocal.

    Endpoints:
        GET    /medicalRecord/<personId>
        POST   /medicalRecord                       (owner from personId, or firstName + lastName)
        PUT    /medicalRecord/<personId>
        PUT    /medicalRecord?firstName=&lastName=
        DELETE /medicalRecord/<personId>
        DELETE /medicalRecord?firstName=&lastName=
    """
    bp = Blueprint("medical_records", __name__)

    def _location(entity):
        return url_for("medical_records.get_medical_record", person_id=entity["personId"])

    @bp.route("/medicalRecord/<int:person_id>", methods=["GET"])
    def get_medical_record(person_id):
        with session_scope(SessionLocal) as session:
            record = medical_records.get_medical_record(session, person_id)
        if record is None:
            raise ServiceError(ErrorKind.NOT_FOUND, medical_records.MEDICAL_RECORD_NOT_FOUND)
        return jsonify(record), 200

    @bp.route("/medicalRecord", methods=["POST"])
    def create_medical_record():
        body = _medical_record_body()
        with session_scope(SessionLocal) as session:
            result = medical_records.create_medical_record(session, body)
        return jsonify(result.entity), 201, {"Location": _location(result.entity)}

    @bp.route("/medicalRecord/<int:person_id>", methods=["PUT"])
    def update_medical_record(person_id):
        body = _medical_record_body()
        with session_scope(SessionLocal) as session:
            result = medical_records.update_medical_record(session, person_id, body)
        return "", 204, {"Location": _location(result.entity)}

    @bp.route("/medicalRecord", methods=["PUT"])
    def update_medical_record_by_names():
        first_name, last_name = names_args()
        body = _medical_record_body()
        with session_scope(SessionLocal) as session:
            result = medical_records.update_medical_record_by_names(session, first_name, last_name, body)
        return "", 204, {"Location": _location(result.entity)}

    @bp.route("/medicalRecord/<int:person_id>", methods=["DELETE"])
    def delete_medical_record(person_id):
        with session_scope(SessionLocal) as session:
            deleted = medical_records.delete_medical_record(session, person_id)
        if not deleted:
            raise ServiceError(ErrorKind.NOT_FOUND, medical_records.MEDICAL_RECORD_NOT_FOUND)
        return "", 204

    @bp.route("/medicalRecord", methods=["DELETE"])
    def delete_medical_record_by_names():
        first_name, last_name = names_args()
        with session_scope(SessionLocal) as session:
            deleted = medical_records.delete_medical_record_by_names(session, first_name, last_name)
        if not deleted:
            raise ServiceError(ErrorKind.NOT_FOUND, medical_records.MEDICAL_RECORD_NOT_FOUND)
        return "", 204

    return bp
