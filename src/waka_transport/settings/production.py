import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "waka_transport"),
}

SMTP_CONFIG = {
    "host": os.getenv("SMTP_SERVER_ADDRESS", ""),
    "port": int(os.getenv("SMTP_PORT", "587")),
    "username": os.getenv("SMTP_LOGIN", ""),
    "password": os.getenv("SMTP_PASSWORD", ""),
    "use_tls": bool(int(os.getenv("SMTP_USE_TLS", "1"))),
    "timeout": int(os.getenv("SMTP_TIMEOUT", "30")),
    "sender": os.getenv("SMTP_SENDER", ""),
}

ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "")
STAFF_EMAIL_DOMAIN = os.getenv("STAFF_EMAIL_DOMAIN", "@wakaeasternbay.org.nz")
FRONTEND_URL = os.getenv("FRONTEND_URL", "https://wakaeasternbay.org.nz")

SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "waka_session")
SESSION_LIFETIME_MINUTES = int(os.getenv("SESSION_LIFETIME_MINUTES", "60"))

REMINDER_TIME = os.getenv("REMINDER_TIME", "10:00")
REMINDERS_ENABLED = bool(int(os.getenv("REMINDERS_ENABLED", "1")))

ACTIVATION_TOKEN_MAX_AGE = 24 * 60 * 60
RESET_TOKEN_MAX_AGE = 60 * 60

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
