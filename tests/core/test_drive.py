# tests/core/test_drive.py

import base64
import pytest
from unittest import mock
from googleapiclient.errors import HttpError
from core import drive


@pytest.fixture
def mock_service():
    return mock.MagicMock()


def test_get_drive_service(monkeypatch, mock_service):
    monkeypatch.setattr("core.google_api.get_drive_service", lambda: mock_service)
    service = drive.get_drive_service()
    assert service == mock_service


def test_decode_content_accepts_bytes_base64_and_data_url():
    raw = b"\x89PNG-bytes"
    encoded = base64.b64encode(raw).decode("ascii")
    assert drive.decode_content(raw) == raw
    assert drive.decode_content(encoded) == raw
    assert drive.decode_content(f"data:image/png;base64,{encoded}") == raw


def test_upload_file_returns_links_and_shares(monkeypatch, mock_service):
    monkeypatch.setattr("core.google_api.get_drive_service", lambda: mock_service)
    files_resource = mock_service.files.return_value
    files_resource.create.return_value.execute.return_value = {
        "id": "file123",
        "webViewLink": "https://drive.google.com/file/d/file123/view",
    }

    result = drive.upload_file("cover.png", "image/png", b"png", folder_id="folder1")

    assert result == {
        "id": "file123",
        "webViewLink": "https://drive.google.com/file/d/file123/view",
        "webContentLink": "",
    }
    _, kwargs = files_resource.create.call_args
    assert kwargs["body"] == {"name": "cover.png", "parents": ["folder1"]}
    mock_service.permissions.return_value.create.assert_called_once_with(
        fileId="file123", body={"role": "reader", "type": "anyone"}
    )


def test_upload_file_without_folder(monkeypatch, mock_service):
    monkeypatch.setattr("core.google_api.get_drive_service", lambda: mock_service)
    mock_service.files.return_value.create.return_value.execute.return_value = {
        "id": "f",
        "webViewLink": "link",
    }
    drive.upload_file("song.mp3", "audio/mpeg", b"mp3")
    _, kwargs = mock_service.files.return_value.create.call_args
    assert "parents" not in kwargs["body"]


def test_upload_file_missing_link_raises(monkeypatch, mock_service):
    monkeypatch.setattr("core.google_api.get_drive_service", lambda: mock_service)
    mock_service.files.return_value.create.return_value.execute.return_value = {"id": "f"}
    with pytest.raises(ValueError):
        drive.upload_file("song.mp3", "audio/mpeg", b"mp3")


def test_upload_file_permission_failure_is_not_fatal(monkeypatch, mock_service):
    monkeypatch.setattr("core.google_api.get_drive_service", lambda: mock_service)
    mock_service.files.return_value.create.return_value.execute.return_value = {
        "id": "f",
        "webViewLink": "link",
    }
    mock_service.permissions.return_value.create.return_value.execute.side_effect = HttpError(
        mock.Mock(status=403, reason="Forbidden"), b"sharing disabled"
    )
    result = drive.upload_file("song.mp3", "audio/mpeg", b"mp3")
    assert result["id"] == "f"
