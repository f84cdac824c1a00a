# /app/core/config.py

"""
Runtime configuration for the catalog service.

Every setting is read from the environment once, at import time, with a
default that is suitable for local development.
"""

import os

from dotenv import load_dotenv

# Values from a local .env file, if present, fill in unset variables.
load_dotenv()

# Get the database URL from the environment.
# The second argument is a default value for local development.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog.db")

# All catalog routes, and every entity's derived `url`, live under this prefix.
CATALOG_PREFIX = os.getenv("CATALOG_PREFIX", "/catalog").rstrip("/")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Set to "false" when the schema is managed exclusively through Alembic.
CREATE_TABLES_ON_STARTUP = os.getenv("CREATE_TABLES_ON_STARTUP", "true").lower() == "true"

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
