"""
Catalog view controller.

Holds the last fetched snapshot of one data source and runs every user action
against it: fetch, search, add/edit (with attachment upload) and delete. Each
action returns an ActionResult; CatalogErrors never escape to the caller.
"""

from typing import List, Optional

import config
from catalog import gateway as default_gateway
from catalog import mapper
from catalog.errors import (
    ActionResult,
    BusyError,
    CatalogError,
    ConfigurationError,
    DeleteError,
    RowNotFoundError,
)
from catalog.gateway import SheetState
from catalog.schema import NOT_FOUND, is_empty_header_row, resolve_columns, variant_for
from catalog.store import SheetConfig
from core import logger as log

log = log.get_logger()

IDLE = "idle"
LOADING = "loading"
READY = "ready"
ERRORED = "errored"


def is_configured(source: Optional[SheetConfig]) -> bool:
    return bool(
        source
        and source.spreadsheet_id
        and source.spreadsheet_id != config.PLACEHOLDER_SPREADSHEET_ID
        and source.sheet_name
    )


class CatalogController:
    def __init__(self, gateway=None, artwork_folder_id=None, audio_folder_id=None):
        self.gateway = gateway or default_gateway
        self.artwork_folder_id = artwork_folder_id or config.ARTWORK_FOLDER_ID
        self.audio_folder_id = audio_folder_id or config.AUDIO_FOLDER_ID
        self.source: Optional[SheetConfig] = None
        self.state = SheetState()
        self.status = IDLE
        self.variant = variant_for(None)
        self.columns = resolve_columns([], self.variant)
        self.busy = False
        self.last_error: Optional[CatalogError] = None

    # --- snapshot -----------------------------------------------------------

    def _replace_state(self, state: SheetState):
        self.state = state
        self.columns = resolve_columns(state.headers, self.variant)
        self.status = ERRORED if state.error else READY

    def records(self) -> List[mapper.ReleaseRecord]:
        return [
            mapper.row_to_record(row, self.columns, index, self.variant)
            for index, row in enumerate(self.state.rows)
        ]

    def search(self, term: str = "") -> List[mapper.ReleaseRecord]:
        """Case-insensitive substring match on title or artist. Never touches the sheet."""
        records = self.records()
        if not term:
            return records
        needle = term.lower()
        title_index = self.columns["title"]
        artist_index = self.columns["artist"]
        matches = []
        for record in records:
            row = self.state.rows[record.row_index]
            title = mapper.cell(row, title_index).lower()
            artist = mapper.cell(row, artist_index).lower()
            if needle in title or needle in artist:
                matches.append(record)
        return matches

    def card_keys(self) -> List[Optional[str]]:
        return [mapper.card_key(row, self.columns, self.variant) for row in self.state.rows]

    def locate(self, key: str) -> int:
        """Row index currently holding the release with this card key."""
        if self.columns["actual_id"] == NOT_FOUND and (
            not self.variant.sequence_field or self.columns[self.variant.sequence_field] == NOT_FOUND
        ):
            raise ConfigurationError(
                f"Sheet '{self.state.sheet_name}' has no '{self.variant.header_for('actual_id')}' column; "
                "releases cannot be identified."
            )
        matches = [index for index, candidate in enumerate(self.card_keys()) if candidate == key]
        if not matches:
            raise RowNotFoundError(f'Release "{key}" is no longer in the sheet. Refresh and open it again.')
        if len(matches) > 1:
            rows = ", ".join(str(index + 2) for index in matches)
            raise ConfigurationError(
                f'Duplicate release id "{key}" in sheet rows {rows}. '
                "Give each release a unique id in the sheet before editing or deleting it."
            )
        return matches[0]

    def record_for(self, key: str) -> mapper.ReleaseRecord:
        index = self.locate(key)
        return mapper.row_to_record(self.state.rows[index], self.columns, index, self.variant)

    def form_for(self, key: str) -> mapper.ReleaseForm:
        return mapper.row_to_form(self.state.rows[self.locate(key)], self.columns)

    def new_form(self) -> mapper.ReleaseForm:
        """Blank add form with the next release id filled in."""
        return mapper.ReleaseForm(
            release_id=mapper.next_release_id(self.state.rows, self.columns, self.variant)
        )

    # --- actions ------------------------------------------------------------

    def fetch(self, source: Optional[SheetConfig] = None) -> ActionResult:
        if source is not None:
            if self.source is None or source.config_id != self.source.config_id:
                log.info(f"Switching data source to '{source.display_name}' ({source.config_id})")
            self.source = source
            self.variant = variant_for(source.config_id)

        self.status = LOADING
        try:
            if not is_configured(self.source):
                raise ConfigurationError(
                    "Configuration required: Spreadsheet ID or Sheet Name is not set or is invalid."
                )
            state = self.gateway.fetch_sheet(self.source.spreadsheet_id, self.source.sheet_name)
        except CatalogError as e:
            log.error(f"fetch failed: {e}")
            self.last_error = e
            self._replace_state(
                SheetState(
                    error=str(e),
                    error_kind=e.kind,
                    spreadsheet_id=self.source.spreadsheet_id if self.source else "",
                    sheet_name=self.source.sheet_name if self.source else "",
                )
            )
            return ActionResult.failed(e)

        self.last_error = None
        self._replace_state(state)
        return ActionResult.ok(f"Loaded {len(state.rows)} releases.", data=state)

    def refresh(self) -> ActionResult:
        return self.fetch()

    def _target_row(self, row_index, card_key):
        if card_key is not None:
            return self.locate(card_key)
        if row_index is not None and not 0 <= row_index < len(self.state.rows):
            raise RowNotFoundError(f"Row {row_index} is not in the current sheet snapshot.")
        return row_index

    def submit(
        self,
        form: mapper.ReleaseForm,
        row_index: Optional[int] = None,
        card_key: Optional[str] = None,
    ) -> ActionResult:
        """Create a release, or overwrite one row when row_index or card_key names it."""
        try:
            self._begin()
        except BusyError as e:
            return ActionResult.failed(e)
        try:
            return self._submit(form, row_index, card_key)
        except CatalogError as e:
            log.error(f"submit failed: {e}")
            return ActionResult.failed(e)
        finally:
            self.busy = False

    def _submit(self, form, row_index, card_key):
        if not is_configured(self.source):
            raise ConfigurationError("No active spreadsheet configuration.")
        form.validate()
        row_index = self._target_row(row_index, card_key)

        # Every upload has to succeed before the sheet is touched.
        artwork_url = form.existing_artwork_url or ""
        audio_url = form.existing_audio_url or ""
        if form.artwork_file:
            artwork_url = self._upload(form.artwork_file, self.artwork_folder_id)
        if form.audio_file:
            audio_url = self._upload(form.audio_file, self.audio_folder_id)

        if row_index is None and not form.release_id:
            form.release_id = mapper.next_release_id(self.state.rows, self.columns, self.variant)

        sequence = None
        if self.variant.sequence_field:
            sequence = self._sequence_for(row_index)

        headers = (
            list(self.variant.default_header_row)
            if is_empty_header_row(self.state.headers)
            else self.state.headers
        )
        values = mapper.form_values(form, self.variant, artwork_url, audio_url, sequence)
        row, dropped = mapper.form_to_row(values, headers, self.variant)
        changes, operation = mapper.build_changes(
            row, self.state.headers, len(self.state.rows), self.variant, row_index
        )

        self.gateway.write_changes(self.source.spreadsheet_id, self.source.sheet_name, changes)
        log.info(f"✅ {operation} saved for release {form.release_id or '(no id)'}")
        if operation == "add_with_headers":
            self.gateway.format_header_row(self.source.spreadsheet_id, self.source.sheet_name)

        message = "Release added." if operation.startswith("add") else "Release updated."
        if dropped:
            message += f" Not saved (no matching column): {', '.join(dropped)}."
        refreshed = self.fetch()
        if not refreshed.success:
            message += f" Reload failed: {refreshed.message}"
        return ActionResult.ok(
            message,
            data={"operation": operation, "changes": changes, "release_id": form.release_id},
            dropped_fields=dropped,
        )

    def _sequence_for(self, row_index):
        seq_index = self.columns[self.variant.sequence_field]
        if row_index is not None and seq_index != NOT_FOUND:
            existing = self.state.rows[row_index]
            if seq_index < len(existing):
                return str(existing[seq_index])
        return mapper.next_sequence(self.state.rows, self.columns, self.variant)

    def _upload(self, attachment: mapper.Attachment, folder_id):
        log.info(f"Uploading {attachment.filename} ({attachment.mime_type})")
        result = self.gateway.upload_attachment(
            attachment.filename, attachment.mime_type, attachment.content, folder_id
        )
        return result["webViewLink"]

    def delete(self, row_index: Optional[int] = None, card_key: Optional[str] = None) -> ActionResult:
        try:
            self._begin()
        except BusyError as e:
            return ActionResult.failed(e)
        try:
            if not is_configured(self.source):
                raise ConfigurationError("No active spreadsheet configuration.")
            if self.state.sheet_id is None:
                raise DeleteError("Sheet ID is not available. Cannot delete row.")
            row_index = self._target_row(row_index, card_key)
            if row_index is None:
                raise DeleteError("No release selected for deletion.")
            self.gateway.delete_row(
                self.source.spreadsheet_id, self.state.sheet_id, row_index, sheet_name=self.source.sheet_name
            )
        except CatalogError as e:
            log.error(f"delete failed: {e}")
            return ActionResult.failed(e)
        finally:
            self.busy = False

        log.info(f"🗑️ Deleted row {row_index}")
        message = "Release deleted."
        refreshed = self.fetch()
        if not refreshed.success:
            message += f" Reload failed: {refreshed.message}"
        return ActionResult.ok(message, data={"row_index": row_index})

    def _begin(self):
        if self.busy:
            raise BusyError("Another save is still in progress. Please wait.")
        self.busy = True
