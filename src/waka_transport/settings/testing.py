import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "waka_transport_test"),
}

SMTP_CONFIG = {
    "host": "localhost",
    "port": 1025,
    "username": "",
    "password": "",
    "use_tls": False,
    "timeout": 5,
    "sender": "noreply@wakaeasternbay.org.nz",
}

ADMIN_EMAIL = "admin@wakaeasternbay.org.nz"
STAFF_EMAIL_DOMAIN = "@wakaeasternbay.org.nz"
FRONTEND_URL = "http://localhost:3000"

SESSION_COOKIE_NAME = "waka_session"
SESSION_LIFETIME_MINUTES = 60

REMINDER_TIME = "10:00"
REMINDERS_ENABLED = False

ACTIVATION_TOKEN_MAX_AGE = 24 * 60 * 60
RESET_TOKEN_MAX_AGE = 60 * 60

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
