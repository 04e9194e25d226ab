import os

from dotenv import load_dotenv

# Values from a local .env override nothing already set in the environment
load_dotenv()


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_float(value: str | None, default: float) -> float:
    try:
        return float(value) if value is not None else default
    except ValueError:
        return default


CLINIC_NAME = os.getenv("CLINIC_NAME", "Aura Wellbeing")

# "sqlite://" keeps everything in memory for the life of the process
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite://")

SEED_DEMO_DATA = _as_bool(os.getenv("SEED_DEMO_DATA"), True)

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

UPLOAD_DELAY_SECONDS = _as_float(os.getenv("UPLOAD_DELAY_SECONDS"), 2.0)
TRANSCRIBE_DELAY_SECONDS = _as_float(os.getenv("TRANSCRIBE_DELAY_SECONDS"), 1.5)
