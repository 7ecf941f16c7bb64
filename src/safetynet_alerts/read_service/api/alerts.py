# src/safetynet_alerts/read_service/api/alerts.py

from flask import Blueprint, jsonify

from safetynet_alerts.dates import today
from safetynet_alerts.params import names_args, required_arg, required_list_arg
from safetynet_alerts.read_service.processors import alerts


def create_alerts_blueprint(SessionLocal, clock=None):
    """
    Factory that creates the alerts blueprint with access to SessionLocal
    for DB queries. clock() returns the reference day used for ages.

    Endpoints:
        GET /firestation?stationNumber=
        GET /childAlert?address=
        GET /phoneAlert?firestation=
        GET /fire?address=
        GET /flood/stations?stations=1,2
        GET /personInfo?firstName=&lastName=
        GET /communityEmail?city=

    Responses are always 200; an unknown key gives empty lists.
    Sessions are only read from and closed, never committed.
    """
    bp = Blueprint("alerts", __name__)
    clock = clock or today

    @bp.route("/firestation", methods=["GET"])
    def persons_covered_by_firestation():
        station_number = required_arg("stationNumber")
        with SessionLocal() as session:
            result = alerts.persons_covered_by_firestation(session, station_number, now=clock())
        return jsonify(result), 200

    @bp.route("/childAlert", methods=["GET"])
    def child_alert():
        address = required_arg("address")
        with SessionLocal() as session:
            result = alerts.child_alert(session, address, now=clock())
        return jsonify(result), 200

    @bp.route("/phoneAlert", methods=["GET"])
    def phone_alert():
        station_number = required_arg("firestation")
        with SessionLocal() as session:
            result = alerts.phone_alert(session, station_number)
        return jsonify(result), 200

    @bp.route("/fire", methods=["GET"])
    def fire():
        address = required_arg("address")
        with SessionLocal() as session:
            result = alerts.fire(session, address, now=clock())
        return jsonify(result), 200

    @bp.route("/flood/stations", methods=["GET"])
    def flood_stations():
        stations = required_list_arg("stations")
        with SessionLocal() as session:
            result = alerts.flood_stations(session, stations, now=clock())
        return jsonify(result), 200

    @bp.route("/personInfo", methods=["GET"])
    def person_info():
        first_name, last_name = names_args()
        with SessionLocal() as session:
            result = alerts.person_info(session, first_name, last_name, now=clock())
        return jsonify(result), 200

    @bp.route("/communityEmail", methods=["GET"])
    def community_email():
        city = required_arg("city")
        with SessionLocal() as session:
            result = alerts.community_email(session, city)
        return jsonify(result), 200

    return bp
