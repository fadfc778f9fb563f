from config import logging_config

SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://api.test/api",
    "timeout": 5,
    "catalog_path": "/course/batch/{batch_id}",
}

OFFICE_LOCATION = {
    "latitude": 12.9716,
    "longitude": 77.5946,
    "radius": 200,
}

DEBUG = False
TESTING = True

LOGGING = logging_config("WARNING")
