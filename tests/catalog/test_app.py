# tests/catalog/test_app.py

import pytest

from catalog.app import create_app
from catalog.controller import CatalogController
from catalog.errors import SheetPermissionError
from catalog.gateway import SheetState
from catalog.schema import DEFAULT_HEADER_ROW
from catalog.store import DEFAULT_CONFIG_ID, ConfigStore

ROWS = [
    ["MS-1", "Blue Hour", "Nadia", "", "", "", "", "Rilis", "2024-01-01"],
    ["MS-2", "Red Sky", "The Ferns", "", "", "", "", "Upload", ""],
]


class StubGateway:
    def __init__(self, rows=None, fetch_error=None):
        self.rows = rows or []
        self.fetch_error = fetch_error
        self.fetches = 0
        self.writes = []
        self.deletes = []

    def fetch_sheet(self, spreadsheet_id, sheet_name):
        self.fetches += 1
        if self.fetch_error:
            raise self.fetch_error
        return SheetState(
            headers=list(DEFAULT_HEADER_ROW),
            rows=[list(r) for r in self.rows],
            sheet_id=0,
            spreadsheet_id=spreadsheet_id,
            sheet_name=sheet_name,
        )

    def write_changes(self, spreadsheet_id, sheet_name, changes):
        self.writes.append(changes)

    def delete_row(self, spreadsheet_id, sheet_id, row_index, sheet_name=""):
        self.deletes.append(row_index)

    def upload_attachment(self, file_name, mime_type, content, folder_id=None):
        return {"id": "f", "webViewLink": "https://drive.google.com/f"}

    def format_header_row(self, spreadsheet_id, sheet_name):
        return True


@pytest.fixture
def store(tmp_path):
    store = ConfigStore(str(tmp_path / "state.json")).load()
    store.get(DEFAULT_CONFIG_ID).spreadsheet_id = "ssid"
    return store


def make_client(store, gateway):
    controller = CatalogController(gateway=gateway, artwork_folder_id="a", audio_folder_id="b")
    app = create_app(store=store, controller=controller)
    app.config["TESTING"] = True
    return app.test_client()


def test_index_lists_releases(store):
    client = make_client(store, StubGateway(ROWS))
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert "Blue Hour" in body
    assert "Red Sky" in body


def test_index_search(store):
    client = make_client(store, StubGateway(ROWS))
    body = client.get("/?q=ferns").get_data(as_text=True)
    assert "Red Sky" in body
    assert "Blue Hour" not in body


def test_permission_error_shows_email_without_retry_loop(store):
    gateway = StubGateway(
        fetch_error=SheetPermissionError("denied", service_account_email="sa@project.iam.gserviceaccount.com")
    )
    client = make_client(store, gateway)

    body = client.get("/").get_data(as_text=True)
    assert "sa@project.iam.gserviceaccount.com" in body
    assert gateway.fetches == 1

    client.get("/")
    assert gateway.fetches == 1

    client.post("/refresh")
    assert gateway.fetches == 2


def test_api_releases(store):
    client = make_client(store, StubGateway(ROWS))
    data = client.get("/api/releases").get_json()
    assert data["success"] is True
    assert [r["card_key"] for r in data["releases"]] == ["MS-1", "MS-2"]


def test_api_release_unknown_key(store):
    client = make_client(store, StubGateway(ROWS))
    response = client.get("/api/releases/MS-99")
    assert response.status_code == 404
    assert response.get_json()["errorKind"] == "not_found"


def test_create_release(store):
    gateway = StubGateway(ROWS)
    client = make_client(store, gateway)
    response = client.post("/releases", data={"title": "New", "artist": "Someone", "status": "Upload"})
    assert response.status_code == 302
    assert gateway.writes[0][0]["range"] == "A4"
    assert gateway.writes[0][0]["values"][0][:3] == ["MS-3", "New", "Someone"]


def test_create_release_validation_returns_to_form(store):
    gateway = StubGateway(ROWS)
    client = make_client(store, gateway)
    response = client.post("/releases", data={"title": "", "artist": ""})
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/releases/new")
    assert gateway.writes == []


def test_edit_release(store):
    gateway = StubGateway(ROWS)
    client = make_client(store, gateway)
    assert client.get("/releases/MS-2/edit").status_code == 200
    client.post(
        "/releases/MS-2/edit",
        data={"release_id": "MS-2", "title": "Red Sky II", "artist": "The Ferns", "status": "Rilis"},
    )
    assert gateway.writes[0][0]["range"] == "A3"


def test_delete_release(store):
    gateway = StubGateway(ROWS)
    client = make_client(store, gateway)
    client.get("/")
    client.post("/releases/MS-2/delete")
    assert gateway.deletes == [1]


def test_toggle_theme_persists(store):
    client = make_client(store, StubGateway(ROWS))
    client.post("/theme")
    assert store.theme == "dark"
    assert ConfigStore(store.path).load().theme == "dark"


def test_add_source_requires_fields(store):
    client = make_client(store, StubGateway(ROWS))
    client.post("/sources", data={"display_name": "X", "spreadsheet_id": "", "sheet_name": "Tab"})
    assert len(store.sources) == 2


def test_add_and_activate_source(store):
    gateway = StubGateway(ROWS)
    client = make_client(store, gateway)
    client.post(
        "/sources", data={"display_name": "Label", "spreadsheet_id": "other", "sheet_name": "Tab"}
    )
    assert store.active.spreadsheet_id == "other"
    assert gateway.fetches == 1

    client.post(f"/sources/{DEFAULT_CONFIG_ID}/activate")
    assert store.active_id == DEFAULT_CONFIG_ID
    assert gateway.fetches == 2
