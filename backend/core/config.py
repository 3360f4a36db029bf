import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")

DEFAULT_DATABASE_URL = "sqlite:///./clinic.sqlite"
DATABASE_URL = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), ["*"])

SEED_SAMPLE_DATA = _get_bool(os.getenv("SEED_SAMPLE_DATA"), default=True)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DEFAULT_WORKING_HOURS_START = os.getenv("DEFAULT_WORKING_HOURS_START", "09:00")
DEFAULT_WORKING_HOURS_END = os.getenv("DEFAULT_WORKING_HOURS_END", "18:00")
DEFAULT_SLOT_DURATION_MINUTES = int(os.getenv("DEFAULT_SLOT_DURATION_MINUTES", "30"))

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and DATABASE_URL == DEFAULT_DATABASE_URL:
        raise RuntimeError("DATABASE_URL must be set in production.")
    if DEFAULT_SLOT_DURATION_MINUTES <= 0:
        raise RuntimeError("DEFAULT_SLOT_DURATION_MINUTES must be a positive integer.")

    # imported here: the slot engine reads these defaults from this module
    from backend.services.availability import is_valid_time

    for name, value in (
        ("DEFAULT_WORKING_HOURS_START", DEFAULT_WORKING_HOURS_START),
        ("DEFAULT_WORKING_HOURS_END", DEFAULT_WORKING_HOURS_END),
    ):
        if not is_valid_time(value):
            raise RuntimeError(f"{name} must use the HH:MM (24-hour) format, got {value!r}.")
