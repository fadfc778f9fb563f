"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

UNSELECTED = -1

# Section path segment used for the raw roster when no section is chosen.
ALL_SECTIONS = "all"

DEFAULT_TIMEOUT_SECONDS = 15
DEFAULT_OFFICE_RADIUS_METERS = 200

# Calendar-year picker window around the current year.
YEAR_CHOICES_BEFORE = 5
YEAR_CHOICES_COUNT = 10

# Open screens (rosters, check-ins) kept per user between requests.
SCREEN_IDLE_SECONDS = 30 * 60
MAX_SCREENS_PER_OWNER = 10

# Course tree endpoint; some backends serve it under /course-catalog/batch/{batch_id}.
CATALOG_PATH = "/course/batch/{batch_id}"
