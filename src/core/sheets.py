from core import google_api
from core import logger as log

log = log.get_logger()


def get_sheets_service():
    log.debug("get_sheets_service called")
    service = google_api.get_sheets_service()
    log.debug("Sheets service obtained")
    return service


# Function to fetch spreadsheet metadata
def get_sheet_metadata(spreadsheet_id: str):
    log.debug(f"get_sheet_metadata called with spreadsheet_id={spreadsheet_id}")
    service = get_sheets_service()
    metadata = (
        service.spreadsheets()
        .get(spreadsheetId=spreadsheet_id, fields="sheets(properties(sheetId,title))")
        .execute()
    )
    log.debug(f"Metadata returned {len(metadata.get('sheets', []))} sheets")
    return metadata


def get_sheet_id(spreadsheet_id: str, sheet_name: str):
    """Numeric sheetId of the tab titled sheet_name, or None when no tab has that title."""
    log.debug(f"get_sheet_id called with spreadsheet_id={spreadsheet_id}, sheet_name={sheet_name}")
    metadata = get_sheet_metadata(spreadsheet_id)
    for sheet in metadata.get("sheets", []):
        properties = sheet.get("properties", {})
        if properties.get("title") == sheet_name and properties.get("sheetId") is not None:
            return properties["sheetId"]
    log.warning(f"Could not find sheetId for sheet name: {sheet_name}")
    return None


def read_sheet(spreadsheet_id, range_name):
    log.debug(f"read_sheet called with spreadsheet_id={spreadsheet_id}, range_name={range_name}")
    service = get_sheets_service()
    result = (
        service.spreadsheets()
        .values()
        .get(spreadsheetId=spreadsheet_id, range=range_name)
        .execute()
    )
    values = result.get("values", [])
    log.debug(f"Sheets API returned {len(values)} rows")
    return values


def batch_update_values(spreadsheet_id: str, sheet_name: str, changes: list):
    """Write each {"range", "values"} change into sheet_name as if typed by a user."""
    log.debug(
        f"batch_update_values called with spreadsheet_id={spreadsheet_id}, sheet_name={sheet_name}, changes={len(changes)}"
    )
    service = get_sheets_service()
    body = {
        "valueInputOption": "USER_ENTERED",
        "data": [
            {"range": f"{sheet_name}!{change['range']}", "values": change["values"]}
            for change in changes
        ],
    }
    result = (
        service.spreadsheets()
        .values()
        .batchUpdate(spreadsheetId=spreadsheet_id, body=body)
        .execute()
    )
    log.info(f"batch_update_values wrote {len(changes)} range(s) to '{sheet_name}'")
    return result


def delete_row(spreadsheet_id: str, sheet_id: int, row_index: int):
    """Delete data row row_index (zero-based, header excluded) from the tab sheet_id."""
    log.debug(f"delete_row called with spreadsheet_id={spreadsheet_id}, sheet_id={sheet_id}, row_index={row_index}")
    start = row_index + 1
    service = get_sheets_service()
    request_body = {
        "requests": [
            {
                "deleteDimension": {
                    "range": {
                        "sheetId": sheet_id,
                        "dimension": "ROWS",
                        "startIndex": start,
                        "endIndex": start + 1,
                    }
                }
            }
        ]
    }
    result = (
        service.spreadsheets()
        .batchUpdate(spreadsheetId=spreadsheet_id, body=request_body)
        .execute()
    )
    log.info(f"Deleted sheet row {start + 1} from sheet ID={sheet_id}")
    return result
