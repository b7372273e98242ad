"""
Conversion between sheet rows and catalog records.

Reads rows into display records and edit forms, lays form values back out
under the sheet's own headers, and works out which ranges an add or edit
writes.
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from catalog.errors import ValidationError, WriteError
from catalog.schema import NOT_FOUND, SchemaVariant, is_empty_header_row, normalize_header
from core import logger as log

log = log.get_logger()

PLACEHOLDER = "N/A"
STATUS_OPTIONS = ("Upload", "Pending", "Rilis", "Takedown")
DEFAULT_STATUS = "Upload"

# A row cannot be written without somewhere to put these.
REQUIRED_WRITE_FIELDS = ("title", "artist")

_LEADING_INT = re.compile(r"\s*(\d+)")


@dataclass
class Attachment:
    filename: str
    mime_type: str
    content: bytes


@dataclass
class ReleaseForm:
    title: str = ""
    artist: str = ""
    status: str = DEFAULT_STATUS
    upc_code: str = ""
    isrc_code: str = ""
    release_date: str = ""
    release_id: str = ""
    existing_artwork_url: str = ""
    existing_audio_url: str = ""
    artwork_file: Optional[Attachment] = None
    audio_file: Optional[Attachment] = None

    def validate(self):
        errors = []
        if not self.title.strip():
            errors.append("Release title is required.")
        if not self.artist.strip():
            errors.append("Artist name is required.")
        if self.status not in STATUS_OPTIONS:
            errors.append(f"Status must be one of: {', '.join(STATUS_OPTIONS)}.")
        if self.artwork_file and not self.artwork_file.mime_type.startswith("image/"):
            errors.append("Artwork must be an image file.")
        if self.audio_file and not self.audio_file.mime_type.startswith("audio/"):
            errors.append("Audio must be an audio file.")
        if errors:
            raise ValidationError(errors)


@dataclass
class ReleaseRecord:
    row_index: int
    card_key: Optional[str]
    release_id: str
    title: str
    artist: str
    artwork_url: str
    audio_url: str
    upc_code: str
    isrc_code: str
    status: str
    release_date: str
    sequence: str = ""

    def to_dict(self):
        return dict(self.__dict__)


def cell(row: List[str], index: int, default: str = "") -> str:
    if index == NOT_FOUND or index >= len(row):
        return default
    value = str(row[index] if row[index] is not None else "")
    return value if value else default


def parse_leading_int(value) -> Optional[int]:
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else None


def card_key(row: List[str], columns: Dict[str, int], variant: SchemaVariant) -> Optional[str]:
    """Identifier used to find this row again after a refresh, or None if it has none."""
    release_id = cell(row, columns["actual_id"]).strip()
    if release_id:
        return release_id
    if variant.sequence_field:
        sequence = cell(row, columns[variant.sequence_field]).strip()
        if sequence:
            return f"no-{sequence}"
    return None


def row_to_record(
    row: List[str], columns: Dict[str, int], row_index: int, variant: SchemaVariant
) -> ReleaseRecord:
    sequence = cell(row, columns[variant.sequence_field]) if variant.sequence_field else ""
    release_id = cell(row, columns["actual_id"]).strip()
    if not release_id:
        release_id = f"No. {sequence}" if sequence else PLACEHOLDER
    return ReleaseRecord(
        row_index=row_index,
        card_key=card_key(row, columns, variant),
        release_id=release_id,
        title=cell(row, columns["title"], PLACEHOLDER),
        artist=cell(row, columns["artist"], PLACEHOLDER),
        artwork_url=cell(row, columns["artwork"]),
        audio_url=cell(row, columns["audio"]),
        upc_code=cell(row, columns["upc"], PLACEHOLDER),
        isrc_code=cell(row, columns["isrc"], PLACEHOLDER),
        status=cell(row, columns["status"], PLACEHOLDER),
        release_date=cell(row, columns["release_date"], PLACEHOLDER),
        sequence=sequence,
    )


def row_to_form(row: List[str], columns: Dict[str, int]) -> ReleaseForm:
    """Pre-fill the edit form from a sheet row."""
    return ReleaseForm(
        release_id=cell(row, columns["actual_id"]),
        title=cell(row, columns["title"]),
        artist=cell(row, columns["artist"]),
        existing_artwork_url=cell(row, columns["artwork"]),
        existing_audio_url=cell(row, columns["audio"]),
        upc_code=cell(row, columns["upc"]),
        isrc_code=cell(row, columns["isrc"]),
        status=cell(row, columns["status"], DEFAULT_STATUS),
        release_date=cell(row, columns["release_date"]),
    )


def form_values(
    form: ReleaseForm,
    variant: SchemaVariant,
    artwork_url: str = "",
    audio_url: str = "",
    sequence: Optional[str] = None,
) -> Dict[str, str]:
    values = {
        "actual_id": form.release_id or "",
        "title": form.title,
        "artist": form.artist,
        "artwork": artwork_url,
        "audio": audio_url,
        "upc": form.upc_code or "",
        "isrc": form.isrc_code or "",
        "status": form.status,
        "release_date": form.release_date or "",
    }
    if variant.sequence_field and sequence is not None:
        values[variant.sequence_field] = sequence
    return values


def form_to_row(
    values: Dict[str, str], headers: List[str], variant: SchemaVariant
) -> Tuple[List[str], List[str]]:
    """Lay values out under headers. Returns the row and the fields that had no column."""
    index_by_header = {}
    for index, header in enumerate(headers):
        index_by_header.setdefault(normalize_header(header), index)

    row = [""] * len(headers)
    dropped = []
    for field_name, value in values.items():
        header = variant.header_for(field_name)
        index = index_by_header.get(normalize_header(header))
        if index is None:
            if field_name in REQUIRED_WRITE_FIELDS:
                raise WriteError(f'Column "{header}" is missing from the sheet; cannot save {field_name}.')
            log.warning(
                f'Header "{header}" (for field "{field_name}") not found in sheet headers. Value "{value}" not written.'
            )
            dropped.append(field_name)
            continue
        row[index] = value
    return row, dropped


def next_release_id(rows: List[List[str]], columns: Dict[str, int], variant: SchemaVariant) -> str:
    """Next id after the highest existing one carrying the variant prefix (max + 1, not count + 1)."""
    prefix = variant.id_prefix
    max_num = 0
    index = columns["actual_id"]
    if index != NOT_FOUND:
        for row in rows:
            value = cell(row, index)
            if value.upper().startswith(prefix.upper()):
                number = parse_leading_int(value[len(prefix) :])
                if number is not None:
                    max_num = max(max_num, number)
    return f"{prefix}{str(max_num + 1).zfill(variant.id_width)}"


def next_sequence(rows: List[List[str]], columns: Dict[str, int], variant: SchemaVariant) -> str:
    index = columns[variant.sequence_field] if variant.sequence_field else NOT_FOUND
    max_num = 0
    if index != NOT_FOUND:
        for row in rows:
            number = parse_leading_int(cell(row, index))
            if number is not None:
                max_num = max(max_num, number)
    return str(max_num + 1)


def build_changes(
    row: List[str],
    headers: List[str],
    row_count: int,
    variant: SchemaVariant,
    row_index: Optional[int] = None,
) -> Tuple[List[dict], str]:
    """Ranges to write for an add, a first add into an empty sheet, or an edit."""
    if row_index is not None:
        return [{"range": f"A{row_index + 2}", "values": [row]}], "edit"
    if is_empty_header_row(headers):
        return [
            {"range": "A1", "values": [list(variant.default_header_row)]},
            {"range": "A2", "values": [row]},
        ], "add_with_headers"
    return [{"range": f"A{row_count + 2}", "values": [row]}], "add"
