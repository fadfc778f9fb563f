import os

from config import logging_config

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "https://api.example.invalid/api"),
    "timeout": float(os.getenv("API_TIMEOUT_SECONDS", "15")),
    # '/course/batch/{batch_id}' or '/course-catalog/batch/{batch_id}', depending on the backend
    "catalog_path": os.getenv("CATALOG_PATH", "/course/batch/{batch_id}"),
}

OFFICE_LOCATION = {
    "latitude": float(os.getenv("OFFICE_LATITUDE", "0")),
    "longitude": float(os.getenv("OFFICE_LONGITUDE", "0")),
    "radius": float(os.getenv("OFFICE_RADIUS_METERS", "200")),
}

DEBUG = False

LOGGING = logging_config(os.getenv("LOG_LEVEL", "INFO"))
