import os


def get_settings_module() -> str:
    # APP_ENV picks the settings module; anything unknown falls back to development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "gaji_kita.config.production"

    if env in {"test", "testing"}:
        return "gaji_kita.config.testing"

    return "gaji_kita.config.development"
