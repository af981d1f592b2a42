import os
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    app_title: str = os.getenv("APP_TITLE", "Lab Inventory API")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_file: str = os.getenv("LOG_FILE", "")

    # Reject usage that exceeds availability before the deduction engine runs.
    strict_usage: bool = _as_bool(os.getenv("STRICT_USAGE", "True"))

    cors_origins: list = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]


settings = Settings()
