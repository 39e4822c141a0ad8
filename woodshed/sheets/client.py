import logging
from typing import List, Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build

from .models import LOG_COLUMNS

logger = logging.getLogger(__name__)


class SheetError(Exception):
    """Custom exception for sheet-related errors"""

    pass


class GoogleSheetsClient:
    """Reads and appends rows of the practice log sheet"""

    SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
    TOKEN_URI = "https://oauth2.googleapis.com/token"

    def __init__(
        self,
        spreadsheet_id: str,
        credentials_path: Optional[str] = None,
        service_account_email: Optional[str] = None,
        private_key: Optional[str] = None,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.credentials_path = credentials_path
        self.service_account_email = service_account_email
        self.private_key = private_key
        self.service = self._build_sheets_service()

    def _load_credentials(self) -> service_account.Credentials:
        if self.service_account_email and self.private_key:
            info = {
                "client_email": self.service_account_email,
                # Keys pasted into env vars usually carry escaped newlines
                "private_key": self.private_key.replace("\\n", "\n"),
                "token_uri": self.TOKEN_URI,
            }
            return service_account.Credentials.from_service_account_info(
                info, scopes=self.SCOPES
            )
        if self.credentials_path:
            return service_account.Credentials.from_service_account_file(
                self.credentials_path, scopes=self.SCOPES
            )
        raise SheetError("No service account credentials were provided")

    def _build_sheets_service(self):
        """Create and return an authorized Sheets API service object"""
        try:
            creds = self._load_credentials()
            return build("sheets", "v4", credentials=creds, cache_discovery=False)
        except SheetError:
            raise
        except Exception as e:
            logger.error(f"Failed to build sheets service: {e}")
            raise SheetError(f"Could not initialize sheets service: {str(e)}")

    @staticmethod
    def _log_range(sheet_name: str) -> str:
        last_column = chr(64 + len(LOG_COLUMNS))
        return f"{sheet_name}!A:{last_column}"

    def get_log_rows(self, sheet_name: str) -> List[List[str]]:
        """Get every row of the log, header included if the sheet has one"""
        try:
            result = (
                self.service.spreadsheets()
                .values()
                .get(spreadsheetId=self.spreadsheet_id, range=self._log_range(sheet_name))
                .execute()
            )
            return result.get("values", [])
        except Exception as e:
            logger.error(f"Error reading practice log: {e}")
            raise SheetError(f"Failed to read {sheet_name}: {str(e)}")

    def append_log_row(self, sheet_name: str, row: List[str]) -> None:
        """Append a single log row to the bottom of the sheet"""
        if len(row) != len(LOG_COLUMNS):
            raise ValueError(f"Log rows must have {len(LOG_COLUMNS)} columns, got {len(row)}")

        try:
            self.service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self._log_range(sheet_name),
                valueInputOption="RAW",
                insertDataOption="INSERT_ROWS",
                body={"values": [row]},
            ).execute()
        except Exception as e:
            logger.error(f"Error appending to practice log: {e}")
            raise SheetError(f"Failed to append to {sheet_name}: {str(e)}")
