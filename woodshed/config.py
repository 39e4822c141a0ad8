import os
from typing import NotRequired, TypedDict

from dotenv import load_dotenv


DEFAULT_SHEET_NAME = "Log"
DEFAULT_GOODREADS_USER_ID = "13258755"
DEFAULT_LETTERBOXD_USERNAME = "kallp"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


class AppConfig(TypedDict):
    """Configuration for the application"""

    SPREADSHEET_ID: str
    SHEET_NAME: str
    PRACTICE_LOG_SECRET: str
    GOODREADS_USER_ID: str
    LETTERBOXD_USERNAME: str
    HOST: str
    PORT: int
    GOOGLE_SERVICE_EMAIL: NotRequired[str | None]
    GOOGLE_PRIVATE_KEY: NotRequired[str | None]
    GOOGLE_CREDENTIALS: NotRequired[str | None]


def load_config() -> AppConfig:
    """Load configuration from environment variables"""
    load_dotenv()

    required_vars = {
        "SPREADSHEET_ID": os.getenv("GOOGLE_SHEET_ID") or os.getenv("SPREADSHEET_ID"),
        "PRACTICE_LOG_SECRET": os.getenv("PRACTICE_LOG_SECRET"),
    }
    credentials = {
        "GOOGLE_SERVICE_EMAIL": os.getenv("GOOGLE_SERVICE_EMAIL"),
        "GOOGLE_PRIVATE_KEY": os.getenv("GOOGLE_PRIVATE_KEY"),
        "GOOGLE_CREDENTIALS": os.getenv("GOOGLE_CREDENTIALS"),
    }

    missing = [k for k, v in required_vars.items() if not v]
    has_inline_key = credentials["GOOGLE_SERVICE_EMAIL"] and credentials["GOOGLE_PRIVATE_KEY"]
    if not has_inline_key and not credentials["GOOGLE_CREDENTIALS"]:
        missing.append("GOOGLE_SERVICE_EMAIL/GOOGLE_PRIVATE_KEY or GOOGLE_CREDENTIALS")
    if missing:
        raise OSError(f"Missing required environment variables: {', '.join(missing)}")

    return {
        **required_vars,
        **credentials,
        "SHEET_NAME": os.getenv("SHEET_NAME", DEFAULT_SHEET_NAME),
        "GOODREADS_USER_ID": os.getenv("GOODREADS_USER_ID", DEFAULT_GOODREADS_USER_ID),
        "LETTERBOXD_USERNAME": os.getenv("LETTERBOXD_USERNAME", DEFAULT_LETTERBOXD_USERNAME),
        "HOST": os.getenv("HOST", DEFAULT_HOST),
        "PORT": int(os.getenv("PORT", DEFAULT_PORT)),
    }
