# tests/core/test_google_api.py

import json
import pytest
from unittest import mock

from core import google_api


# --- Credentials ---

def test_load_credentials_env(monkeypatch):
    creds_mock = mock.Mock()
    monkeypatch.setenv("GOOGLE_CREDENTIALS_JSON", json.dumps({"foo": "bar"}))
    monkeypatch.setattr(
        google_api.service_account.Credentials,
        "from_service_account_info",
        lambda *a, **k: creds_mock,
    )
    assert google_api.load_credentials() == creds_mock


def test_load_credentials_env_invalid_json(monkeypatch):
    monkeypatch.setenv("GOOGLE_CREDENTIALS_JSON", "not-json")
    monkeypatch.setattr(
        google_api.service_account.Credentials,
        "from_service_account_file",
        lambda *a, **k: "filecreds",
    )
    creds = google_api.load_credentials()
    assert creds == "filecreds"


def test_load_credentials_env_not_a_dict(monkeypatch):
    monkeypatch.setenv("GOOGLE_CREDENTIALS_JSON", json.dumps(["a", "b"]))
    monkeypatch.setattr(
        google_api.service_account.Credentials,
        "from_service_account_file",
        lambda *a, **k: "filecreds",
    )
    assert google_api.load_credentials() == "filecreds"


def test_load_credentials_file_missing(monkeypatch):
    monkeypatch.delenv("GOOGLE_CREDENTIALS_JSON", raising=False)
    monkeypatch.setattr(
        google_api.service_account.Credentials,
        "from_service_account_file",
        lambda *a, **k: (_ for _ in ()).throw(FileNotFoundError("missing")),
    )
    with pytest.raises(FileNotFoundError):
        google_api.load_credentials()


# --- Services ---

def test_get_drive_and_sheets_service(monkeypatch):
    creds = mock.Mock()
    monkeypatch.setattr(google_api, "load_credentials", lambda: creds)
    build_mock = mock.Mock()
    monkeypatch.setattr(google_api, "build", build_mock)

    google_api.get_drive_service()
    build_mock.assert_called_with("drive", "v3", credentials=creds)

    google_api.get_sheets_service()
    build_mock.assert_called_with("sheets", "v4", credentials=creds)


def test_get_gspread_client(monkeypatch):
    creds = mock.Mock()
    monkeypatch.setattr(google_api, "load_credentials", lambda: creds)
    auth_mock = mock.Mock()
    monkeypatch.setattr(google_api.gspread, "authorize", lambda c: auth_mock)
    assert google_api.get_gspread_client() == auth_mock


# --- Service account identity ---

def test_get_service_account_email(monkeypatch):
    creds = mock.Mock(service_account_email="catalog@project.iam.gserviceaccount.com")
    monkeypatch.setattr(google_api, "load_credentials", lambda: creds)
    assert google_api.get_service_account_email() == "catalog@project.iam.gserviceaccount.com"


def test_get_service_account_email_without_credentials(monkeypatch):
    def missing():
        raise FileNotFoundError("credentials.json")

    monkeypatch.setattr(google_api, "load_credentials", missing)
    assert google_api.get_service_account_email() is None


# --- Formatting ---

def test_apply_header_formatting(monkeypatch):
    worksheet = mock.Mock()
    client = mock.Mock()
    client.open_by_key.return_value.worksheet.return_value = worksheet
    monkeypatch.setattr(google_api, "get_gspread_client", lambda: client)

    google_api.apply_header_formatting("ssid", "Sheet1")

    client.open_by_key.assert_called_once_with("ssid")
    client.open_by_key.return_value.worksheet.assert_called_once_with("Sheet1")
    worksheet.freeze.assert_called_once_with(rows=1)
    worksheet.format.assert_called_once_with("1:1", {"textFormat": {"bold": True}})
