"""
app.py: Flask application for the command side (Write Service) of SafetyNet Alerts.

This service owns every change to the directory of residents:
- persons, firestation assignments and medical records (create, update, delete),
- the one-time JSON seed of an empty database at startup.

Reads for the alerts live in read_service, which shares the same database.

Run with: python -m safetynet_alerts.write_service.app (starts on port 5000).
"""

import logging

from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from safetynet_alerts.config import (
    FLASK_DEBUG, JSON_SEED_ENABLED, LOG_FORMAT, LOG_LEVEL, WRITE_SERVICE_PORT,
)
from safetynet_alerts.db.session import SessionLocal, create_tables
from safetynet_alerts.errors import register_error_handlers
from safetynet_alerts.write_service.api.firestations import create_firestations_blueprint
from safetynet_alerts.write_service.api.medical_records import create_medical_records_blueprint
from safetynet_alerts.write_service.api.persons import create_persons_blueprint
from safetynet_alerts.write_service.ingestion.json_seed import seed_database

logger = logging.getLogger(__name__)


def create_app(session_factory=None):
    """Build the write service. Tests pass their own session factory."""
    session_factory = session_factory or SessionLocal

    app = Flask(__name__)
    register_error_handlers(app)

    app.register_blueprint(create_persons_blueprint(session_factory))
    app.register_blueprint(create_firestations_blueprint(session_factory))
    app.register_blueprint(create_medical_records_blueprint(session_factory))

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check for write_service: verifies the database connection.
        Returns: {"status": "ok", "service": "write_service", "database": true}
        """
        try:
            with session_factory() as session:
                session.execute(text("SELECT 1"))
            database_status = True
        except SQLAlchemyError as e:
            logger.error("Database health check failed: %s", e)
            database_status = False

        return jsonify({
            "status": "ok" if database_status else "error",
            "service": "write_service",
            "database": database_status,
        }), 200 if database_status else 503

    return app


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    create_tables()
    if JSON_SEED_ENABLED:
        seed_database()

    app = create_app()
    logger.info("Write service listening on port %s", WRITE_SERVICE_PORT)
    app.run(host="0.0.0.0", port=WRITE_SERVICE_PORT, debug=FLASK_DEBUG)


if __name__ == "__main__":
    main()
