from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from woodshed.api.main import create_app
from woodshed.sheets.client import SheetError


NOW = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)
SECRET = "test-secret"


class FakeSheetsClient:
    """In-memory stand-in for GoogleSheetsClient"""

    def __init__(self, rows=None, fail=False):
        self.rows = [list(row) for row in rows or []]
        self.appended = []
        self.fail = fail

    def get_log_rows(self, sheet_name):
        if self.fail:
            raise SheetError(f"Failed to read {sheet_name}: boom")
        return [list(row) for row in self.rows]

    def append_log_row(self, sheet_name, row):
        if self.fail:
            raise SheetError(f"Failed to append to {sheet_name}: boom")
        self.appended.append((sheet_name, list(row)))
        self.rows.append(list(row))


@pytest.fixture
def config():
    return {
        "SPREADSHEET_ID": "sheet-id",
        "SHEET_NAME": "Log",
        "PRACTICE_LOG_SECRET": SECRET,
        "GOODREADS_USER_ID": "42",
        "LETTERBOXD_USERNAME": "someone",
        "HOST": "127.0.0.1",
        "PORT": 8000,
    }


@pytest.fixture
def sheets_client():
    return FakeSheetsClient(
        rows=[
            ["timestamp", "category", "minutes", "notes", "type", "venue"],
            ["2024-03-04T09:00:00.000Z", "Scales", "20", "slow", "practice", ""],
            ["2024-03-02T21:00:00.000Z", "", "90", "", "gig", "The Blue Note"],
            ["not-a-date", "scales", "20", "", "practice", ""],
        ]
    )


@pytest.fixture
def client(config, sheets_client):
    app = create_app(config, sheets_client=sheets_client, clock=lambda: NOW)
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {SECRET}"}
