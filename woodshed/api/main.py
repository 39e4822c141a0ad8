from collections.abc import Callable
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from woodshed import __version__
from woodshed.api.routers import feeds, practice_log
from woodshed.config import AppConfig
from woodshed.practice.tracker import PracticeLog
from woodshed.sheets.client import GoogleSheetsClient


class HealthStatus(BaseModel):
    status: str
    version: str


def build_sheets_client(config: AppConfig) -> GoogleSheetsClient:
    return GoogleSheetsClient(
        spreadsheet_id=config["SPREADSHEET_ID"],
        credentials_path=config.get("GOOGLE_CREDENTIALS"),
        service_account_email=config.get("GOOGLE_SERVICE_EMAIL"),
        private_key=config.get("GOOGLE_PRIVATE_KEY"),
    )


def create_app(
    config: AppConfig,
    sheets_client: Optional[GoogleSheetsClient] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Build the dashboard API around an explicit configuration."""
    app = FastAPI(title="Woodshed API", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.state.config = config
    app.state.practice_log = PracticeLog(
        sheets_client=sheets_client or build_sheets_client(config),
        sheet_name=config["SHEET_NAME"],
        clock=clock,
    )

    api = APIRouter(prefix="/api")

    @api.get("/health")
    async def health_check() -> HealthStatus:
        """Return health status of the API."""
        return HealthStatus(status="healthy", version=__version__)

    api.include_router(practice_log.router)
    api.include_router(feeds.router)

    app.include_router(api)
    return app
