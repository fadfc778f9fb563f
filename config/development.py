import os

from config import logging_config

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:8080/api"),
    "timeout": float(os.getenv("API_TIMEOUT_SECONDS", "15")),
    # '/course/batch/{batch_id}' or '/course-catalog/batch/{batch_id}', depending on the backend
    "catalog_path": os.getenv("CATALOG_PATH", "/course/batch/{batch_id}"),
}

# Campus the staff check-in geofence is centred on
OFFICE_LOCATION = {
    "latitude": float(os.getenv("OFFICE_LATITUDE", "12.9716")),
    "longitude": float(os.getenv("OFFICE_LONGITUDE", "77.5946")),
    "radius": float(os.getenv("OFFICE_RADIUS_METERS", "200")),
}

DEBUG = True

LOGGING = logging_config(os.getenv("LOG_LEVEL", "DEBUG"))
