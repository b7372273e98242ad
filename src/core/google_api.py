import os
import json
import gspread
from google.oauth2 import service_account
from googleapiclient.discovery import build
import config
from core import logger as log

log = log.get_logger()


def load_credentials():
    """Load credentials either from the GOOGLE_CREDENTIALS_JSON env var or the local credentials file.
    If GOOGLE_CREDENTIALS_JSON is set but contains invalid JSON or is not a dict, logs a warning and falls back to the file.
    """
    creds_json = os.getenv("GOOGLE_CREDENTIALS_JSON")
    if creds_json:
        try:
            creds_dict = json.loads(creds_json)
            if not isinstance(creds_dict, dict):
                log.warning(
                    "GOOGLE_CREDENTIALS_JSON did not decode to a dictionary. Falling back to credentials file."
                )
                raise ValueError("Decoded JSON is not a dict")
            return service_account.Credentials.from_service_account_info(
                creds_dict,
                scopes=config.SCOPES,
            )
        except (json.JSONDecodeError, ValueError, TypeError) as e:
            log.warning(
                f"Invalid GOOGLE_CREDENTIALS_JSON environment variable: {e}. Falling back to credentials file."
            )
    return service_account.Credentials.from_service_account_file(
        config.GOOGLE_CREDENTIALS_FILE,
        scopes=config.SCOPES,
    )


def get_drive_service():
    creds = load_credentials()
    return build("drive", "v3", credentials=creds)


def get_sheets_service():
    """Return raw Sheets API client (Google API Resource)"""
    creds = load_credentials()
    return build("sheets", "v4", credentials=creds)


def get_gspread_client():
    """Return gspread client for convenient worksheet editing"""
    creds = load_credentials()
    return gspread.authorize(creds)


def get_service_account_email():
    """Email address the spreadsheet must be shared with, or None if credentials cannot be loaded."""
    try:
        creds = load_credentials()
    except (OSError, ValueError) as e:
        log.warning(f"Could not load service account credentials: {e}")
        return None
    return getattr(creds, "service_account_email", None)


def apply_header_formatting(spreadsheet_id, sheet_name):
    """Bold and freeze the header row of a freshly initialised catalog tab."""
    log.debug(f"Applying header formatting to {spreadsheet_id}!{sheet_name}")
    gc = get_gspread_client()
    worksheet = gc.open_by_key(spreadsheet_id).worksheet(sheet_name)
    worksheet.freeze(rows=1)
    worksheet.format("1:1", {"textFormat": {"bold": True}})
    log.info(f"✅ Header row formatted for sheet '{sheet_name}'")
