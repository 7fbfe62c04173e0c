# /app/core/config.py

"""
Central configuration for the course dashboard backend.

All values are read once from the environment (and an optional `.env` file)
when this module is first imported. Other modules import the constants they
need from here so tests can patch them where they are used.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# --- Record Source Selection ---
# "remote" talks to the Living Apps record-storage service.
# "local" reads CSV snapshots from LOCAL_DATA_DIR (for local development).
RECORD_SOURCE = os.getenv("RECORD_SOURCE", "remote").lower()

# --- Remote Record Storage ---
LIVINGAPPS_BASE_URL = os.getenv("LIVINGAPPS_BASE_URL", "https://my.living-apps.de/rest").rstrip("/")
LIVINGAPPS_API_KEY = os.getenv("LIVINGAPPS_API_KEY")

# A value of 0 disables the timeout entirely.
_raw_timeout = float(os.getenv("LIVINGAPPS_TIMEOUT", "30"))
LIVINGAPPS_TIMEOUT = _raw_timeout if _raw_timeout > 0 else None

# The five remote collections. Keys double as the local CSV file names.
APP_IDS = {
    "dozenten": os.getenv("LIVINGAPPS_APP_ID_DOZENTEN", "6996d396a3cba9dbd7b291e4"),
    "teilnehmer": os.getenv("LIVINGAPPS_APP_ID_TEILNEHMER", "6996d397556cfd0a88bacc01"),
    "raeume": os.getenv("LIVINGAPPS_APP_ID_RAEUME", "6996d397a7f0cfafb8e7beee"),
    "kurse": os.getenv("LIVINGAPPS_APP_ID_KURSE", "6996d3982375c8c0e6b353df"),
    "anmeldungen": os.getenv("LIVINGAPPS_APP_ID_ANMELDUNGEN", "6996d3986a48cd0c5988c45d"),
}

# --- Local Snapshot Storage ---
LOCAL_DATA_DIR = os.getenv("LOCAL_DATA_DIR", "app/data")

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Dashboard ---
UPCOMING_COURSES_LIMIT = 5
