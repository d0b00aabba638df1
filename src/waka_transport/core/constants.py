"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_SESSION_MINUTES = 60
DEFAULT_REMINDER_TIME = "10:00"
DEFAULT_SMTP_TIMEOUT_SECONDS = 30
DEFAULT_PAGE_SIZE = 20

ACTIVATION_TOKEN_MAX_AGE = 24 * 60 * 60
RESET_TOKEN_MAX_AGE = 60 * 60

STAFF_EMAIL_DOMAIN = "@wakaeasternbay.org.nz"
ORGANISATION_NAME = "Waka Eastern Bay Community Transport"
ORGANISATION_URL = "https://wakaeasternbay.org.nz"

DATE_FORMAT = "%Y-%m-%d"
