# src/safetynet_alerts/write_service/api/firestations.py

from flask import Blueprint, jsonify, url_for

from safetynet_alerts.db.session import session_scope
from safetynet_alerts.errors import ErrorKind, ServiceError
from safetynet_alerts.params import json_body, required_arg
from safetynet_alerts.write_service.processing import firestations
from safetynet_alerts.write_service.schemas import FIRESTATION_SCHEMA

ADDRESS_NOT_FOUND = "address not found"


def create_firestations_blueprint(SessionLocal):
    """
    Factory that creates the firestations blueprint with access to SessionLocal.

    Endpoints:
        GET    /firestation/get?address=
        POST   /firestation
        PUT    /firestation?address=
        DELETE /firestation?address=

    GET /firestation?stationNumber= belongs to the read service (coverage alert).
    """
    bp = Blueprint("firestations", __name__)

    def _location(entity):
        return url_for("firestations.get_firestation", address=entity["address"])

    @bp.route("/firestation/get", methods=["GET"])
    def get_firestation():
        address = required_arg("address")
        with session_scope(SessionLocal) as session:
            firestation = firestations.get_firestation(session, address)
        if firestation is None:
            raise ServiceError(ErrorKind.NOT_FOUND, ADDRESS_NOT_FOUND)
        return jsonify(firestation), 200

    @bp.route("/firestation", methods=["POST"])
    def create_firestation():
        body = json_body(FIRESTATION_SCHEMA)
        with session_scope(SessionLocal) as session:
            result = firestations.create_firestation(session, body)
        return jsonify(result.entity), 201, {"Location": _location(result.entity)}

    @bp.route("/firestation", methods=["PUT"])
    def update_firestation():
        address = required_arg("address")
        body = json_body(FIRESTATION_SCHEMA)
        with session_scope(SessionLocal) as session:
            result = firestations.update_firestation(session, address, body)
        return "", 204, {"Location": _location(result.entity)}

    @bp.route("/firestation", methods=["DELETE"])
    def delete_firestation():
        address = required_arg("address")
        with session_scope(SessionLocal) as session:
            deleted = firestations.delete_firestation(session, address)
        if not deleted:
            raise ServiceError(ErrorKind.NOT_FOUND, ADDRESS_NOT_FOUND)
        return "", 204

    return bp
