"""
app.py: Flask application for the query side (Read Service) of SafetyNet Alerts.

This microservice answers the emergency alerts:
- who is covered by a firestation, children at an address, phone lists,
- households per station for floods, residents for a fire,
- person details and community emails.

It only reads the database written by write_service (CQRS separation).

Run with: python -m safetynet_alerts.read_service.app (starts on port 5001).
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from safetynet_alerts.config import FLASK_DEBUG, LOG_FORMAT, LOG_LEVEL, READ_SERVICE_PORT
from safetynet_alerts.db.session import SessionLocal
from safetynet_alerts.errors import register_error_handlers
from safetynet_alerts.read_service.api.alerts import create_alerts_blueprint

logger = logging.getLogger(__name__)


def create_app(session_factory=None, clock=None):
    """
    Build the read service.
    Tests pass their own session factory, and a clock to pin ages.
    """
    session_factory = session_factory or SessionLocal

    app = Flask(__name__)

    # Use Flask CORS to allow connections from other sites
    CORS(app)
    register_error_handlers(app)

    app.register_blueprint(create_alerts_blueprint(session_factory, clock=clock))

    # Basic health check endpoint (Query side: check the database connection)
    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check for read_service: verifies the database connection.
        Returns: {"status": "ok", "service": "read_service", "database": true}
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
            "service": "read_service",
            "database": database_status,
        }), 200 if database_status else 503

    return app


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    app = create_app()
    logger.info("Read service listening on port %s", READ_SERVICE_PORT)
    app.run(host="0.0.0.0", port=READ_SERVICE_PORT, debug=FLASK_DEBUG)


if __name__ == "__main__":
    main()
