import io
import base64
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload
from core import google_api
from core import logger as log

log = log.get_logger()


def get_drive_service():
    log.debug("get_drive_service called with no parameters")
    service = google_api.get_drive_service()
    log.debug("Drive service obtained")
    return service


def decode_content(content):
    """Accept raw bytes, a base64 string, or a data: URL and return the file bytes."""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if content.startswith("data:"):
        content = content[content.index(",") + 1 :]
    return base64.b64decode(content)


def make_public(service, file_id):
    """Give 'anyone with the link' read access. Returns False when Drive refuses."""
    try:
        service.permissions().create(
            fileId=file_id,
            body={"role": "reader", "type": "anyone"},
        ).execute()
        return True
    except HttpError as e:
        log.warning(
            f"Could not set public read permissions for uploaded file {file_id}. "
            f"The file might not be publicly accessible via its link. Error: {e}"
        )
        return False


def upload_file(file_name, mime_type, content, folder_id=None):
    """Upload a file to Google Drive and return {"id", "webViewLink", "webContentLink"}."""
    log.debug(f"upload_file called with file_name={file_name}, mime_type={mime_type}, folder_id={folder_id}")
    service = get_drive_service()

    file_metadata = {"name": file_name}
    if folder_id:
        file_metadata["parents"] = [folder_id]

    media = MediaIoBaseUpload(io.BytesIO(decode_content(content)), mimetype=mime_type)
    uploaded = (
        service.files()
        .create(
            body=file_metadata,
            media_body=media,
            fields="id, webViewLink, webContentLink",
            supportsAllDrives=True,
        )
        .execute()
    )
    if not uploaded.get("id") or not uploaded.get("webViewLink"):
        raise ValueError("No file ID or webViewLink returned by Google Drive.")
    log.info(f"📄 Uploaded '{file_name}' to Drive as {uploaded['id']}")

    make_public(service, uploaded["id"])
    return {
        "id": uploaded["id"],
        "webViewLink": uploaded["webViewLink"],
        "webContentLink": uploaded.get("webContentLink", ""),
    }
