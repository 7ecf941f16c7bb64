"""
config.py
----------
Environment configuration shared by the write service and the read service.
Values come from the process environment (or a .env file in the project root).
"""

import os
import urllib.parse
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# PostgreSQL connection
PG_HOST = os.getenv('PG_HOST', 'localhost')
PG_PORT = os.getenv('PG_PORT', '5432')
PG_DB = os.getenv('PG_DB', 'safetynet')
PG_USER = os.getenv('PG_USER', 'postgres')
PG_PASSWORD = os.getenv('PG_PASSWORD', 'postgres')

# DATABASE_URL wins over the PG_* variables when it is set
DATABASE_URL = os.getenv("DATABASE_URL") or (
    f"postgresql+psycopg2://{PG_USER}:{urllib.parse.quote_plus(PG_PASSWORD)}"
    f"@{PG_HOST}:{PG_PORT}/{PG_DB}"
)

SQL_ECHO = os.getenv('SQL_ECHO', 'False').lower() == 'true'

# Seeding the store from a JSON file on first start
JSON_SEED_ENABLED = os.getenv('JSON_SEED_ENABLED', 'True').lower() == 'true'
JSON_SEED_PATH = Path(os.getenv(
    'JSON_SEED_PATH',
    str(Path(__file__).parent / "write_service" / "ingestion" / "data.json"),
))

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

WRITE_SERVICE_PORT = int(os.getenv('WRITE_SERVICE_PORT', '5000'))
READ_SERVICE_PORT = int(os.getenv('READ_SERVICE_PORT', '5001'))
FLASK_DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
