import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unrecognised falls back to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "waka_transport.settings.production"

    if env in {"test", "testing"}:
        return "waka_transport.settings.testing"

    return "waka_transport.settings.development"
