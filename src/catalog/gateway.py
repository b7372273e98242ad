"""
Remote store access for the catalog.

Wraps core.sheets / core.drive and turns googleapiclient HttpErrors into the
catalog error types, so the controller never sees a raw API failure.
"""

import datetime
from dataclasses import dataclass, field
from typing import List, Optional

import gspread
import pytz
from google.auth.exceptions import GoogleAuthError
from googleapiclient.errors import HttpError

import config
from catalog.errors import (
    CatalogError,
    ConfigurationError,
    DeleteError,
    NotFoundError,
    SheetPermissionError,
    UploadError,
    WriteError,
)
from core import drive, google_api, sheets
from core import logger as log

log = log.get_logger()

CREDENTIAL_ERRORS = (GoogleAuthError, FileNotFoundError)


@dataclass
class SheetState:
    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)
    sheet_id: Optional[int] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    last_updated: Optional[datetime.datetime] = None
    spreadsheet_id: str = ""
    sheet_name: str = ""


def now():
    return datetime.datetime.now(pytz.timezone(config.TIMEZONE))


def _error_text(error: HttpError) -> str:
    content = error.content.decode("utf-8", "replace") if error.content else ""
    return f"{error} {content}"


def is_permission_denied(error: HttpError) -> bool:
    return getattr(error.resp, "status", None) == 403 or "PERMISSION_DENIED" in _error_text(error)


def is_not_found(error: HttpError) -> bool:
    return (
        getattr(error.resp, "status", None) == 404
        or "Requested entity was not found" in _error_text(error)
    )


def permission_error(spreadsheet_id, sheet_name) -> SheetPermissionError:
    email = google_api.get_service_account_email()
    return SheetPermissionError(
        f"Permission denied for spreadsheet {spreadsheet_id} (sheet: {sheet_name}). "
        f"Share the sheet with the service account email: {email or 'unknown service account'}",
        service_account_email=email,
    )


def credentials_error(error) -> ConfigurationError:
    log.error(f"Google credentials could not be loaded: {error}")
    return ConfigurationError(f"Google service account credentials could not be loaded: {error}")


def fetch_sheet(spreadsheet_id: str, sheet_name: str) -> SheetState:
    """Read the whole tab. The first row is the header row."""
    log.debug(f"fetch_sheet called with spreadsheet_id={spreadsheet_id}, sheet_name={sheet_name}")

    sheet_id = None
    try:
        sheet_id = sheets.get_sheet_id(spreadsheet_id, sheet_name)
    except HttpError as e:
        # Reading can still succeed; only delete needs the handle.
        log.error(f"Error fetching spreadsheet metadata: {e}")
    except CREDENTIAL_ERRORS as e:
        raise credentials_error(e) from e

    try:
        values = sheets.read_sheet(spreadsheet_id, sheet_name)
    except HttpError as e:
        log.error(f"Error fetching sheet data: {e}")
        if is_permission_denied(e):
            raise permission_error(spreadsheet_id, sheet_name) from e
        if is_not_found(e):
            raise NotFoundError("Spreadsheet or sheet not found. Check ID and Name.") from e
        raise CatalogError(f"Failed to fetch sheet data: {e}") from e
    except CREDENTIAL_ERRORS as e:
        raise credentials_error(e) from e
    except OSError as e:
        raise CatalogError(f"Failed to fetch sheet data: {e}") from e

    headers = [str(h) for h in values[0]] if values else []
    rows = [[str(v) for v in row] for row in values[1:]]
    log.info(f"📥 Loaded {len(rows)} rows from '{sheet_name}'")
    return SheetState(
        headers=headers,
        rows=rows,
        sheet_id=sheet_id,
        last_updated=now(),
        spreadsheet_id=spreadsheet_id,
        sheet_name=sheet_name,
    )


def write_changes(spreadsheet_id: str, sheet_name: str, changes: list):
    log.debug(f"write_changes called with {len(changes)} change(s) for '{sheet_name}'")
    try:
        return sheets.batch_update_values(spreadsheet_id, sheet_name, changes)
    except HttpError as e:
        log.error(f"batch update failed: {e}")
        if is_permission_denied(e):
            raise permission_error(spreadsheet_id, sheet_name) from e
        raise WriteError(f"Failed to save data to Google Sheet: {e}") from e
    except CREDENTIAL_ERRORS as e:
        raise credentials_error(e) from e
    except OSError as e:
        raise WriteError(f"Failed to save data to Google Sheet: {e}") from e


def delete_row(spreadsheet_id: str, sheet_id: Optional[int], row_index: int, sheet_name: str = ""):
    log.debug(f"delete_row called with sheet_id={sheet_id}, row_index={row_index}")
    if sheet_id is None:
        raise DeleteError("Sheet ID is not available. Cannot delete row.")
    try:
        return sheets.delete_row(spreadsheet_id, sheet_id, row_index)
    except HttpError as e:
        log.error(f"row delete failed: {e}")
        if is_permission_denied(e):
            raise permission_error(spreadsheet_id, sheet_name) from e
        raise DeleteError(f"Failed to delete row: {e}") from e
    except CREDENTIAL_ERRORS as e:
        raise credentials_error(e) from e
    except OSError as e:
        raise DeleteError(f"Failed to delete row: {e}") from e


def upload_attachment(file_name: str, mime_type: str, content, folder_id: Optional[str] = None) -> dict:
    log.debug(f"upload_attachment called with file_name={file_name}, folder_id={folder_id}")
    try:
        return drive.upload_file(file_name, mime_type, content, folder_id)
    except CREDENTIAL_ERRORS as e:
        raise credentials_error(e) from e
    except (HttpError, ValueError, OSError) as e:
        log.error(f"Google Drive API upload error: {e}")
        raise UploadError(f"Upload to Google Drive failed: {e}") from e


def format_header_row(spreadsheet_id: str, sheet_name: str) -> bool:
    """Best effort; a formatting failure never fails the write that preceded it."""
    try:
        google_api.apply_header_formatting(spreadsheet_id, sheet_name)
        return True
    except (gspread.exceptions.GSpreadException, GoogleAuthError, HttpError, OSError) as e:
        log.warning(f"Could not format header row of '{sheet_name}': {e}")
        return False
