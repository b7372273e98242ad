"""
Header-name tables for the catalog sheets.

A schema variant says which header holds each logical field of a release,
what header row to write into an empty sheet, and how new release ids look.
Variants are picked by data-source id; unknown ids use the "custom" variant.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

NOT_FOUND = -1

FIELDS = (
    "id",
    "title",
    "artist",
    "artwork",
    "audio",
    "upc",
    "isrc",
    "status",
    "release_date",
    "actual_id",
)

DEFAULT_HEADER_NAMES = MappingProxyType(
    {
        "id": "id rilis",
        "actual_id": "id rilis",
        "title": "judul rilisan",
        "artist": "artis",
        "artwork": "gambar rilisan",
        "audio": "file audio",
        "upc": "upc code",
        "isrc": "isrc code",
        "status": "status",
        "release_date": "tanggal tayang",
    }
)

# "No" is a running sequence; "ID Rilis" stays the stable identifier.
IMUSICIAN_HEADER_NAMES = MappingProxyType(
    dict(DEFAULT_HEADER_NAMES, id="no", artist="artist", upc="upc", isrc="isrc")
)

DEFAULT_HEADER_ROW = (
    "ID Rilis",
    "Judul Rilisan",
    "Artis",
    "Gambar Rilisan",
    "File Audio",
    "UPC Code",
    "ISRC Code",
    "Status",
    "Tanggal Tayang",
)

IMUSICIAN_HEADER_ROW = (
    "No",
    "ID Rilis",
    "Judul Rilisan",
    "Artist",
    "Gambar Rilisan",
    "File Audio",
    "UPC",
    "ISRC",
    "Status",
    "Tanggal Tayang",
)


@dataclass(frozen=True)
class SchemaVariant:
    name: str
    header_names: Mapping[str, str]
    default_header_row: Tuple[str, ...]
    id_prefix: str
    id_width: int = 0
    # Logical field holding a running number instead of the release id.
    sequence_field: Optional[str] = None

    def header_for(self, field: str) -> str:
        return self.header_names[field]


SCHEMA_VARIANTS: Dict[str, SchemaVariant] = {
    "multiple-studios": SchemaVariant(
        name="multiple-studios",
        header_names=DEFAULT_HEADER_NAMES,
        default_header_row=DEFAULT_HEADER_ROW,
        id_prefix="MS-",
    ),
    "imusician": SchemaVariant(
        name="imusician",
        header_names=IMUSICIAN_HEADER_NAMES,
        default_header_row=IMUSICIAN_HEADER_ROW,
        id_prefix="IM-",
        id_width=3,
        sequence_field="id",
    ),
    "custom": SchemaVariant(
        name="custom",
        header_names=DEFAULT_HEADER_NAMES,
        default_header_row=DEFAULT_HEADER_ROW,
        id_prefix="GS-",
        id_width=3,
    ),
}

CONFIG_VARIANTS = {
    "default-sheet-1": "multiple-studios",
    "i-musician-sheet": "imusician",
}


def variant_for(config_id: Optional[str]) -> SchemaVariant:
    return SCHEMA_VARIANTS[CONFIG_VARIANTS.get(config_id, "custom")]


def normalize_header(value) -> str:
    return str(value or "").strip().lower()


def is_empty_header_row(headers: List[str]) -> bool:
    """True when the sheet has no header row, or every header cell is blank."""
    return not any(normalize_header(h) for h in headers or [])


def resolve_columns(headers: List[str], variant: SchemaVariant) -> Dict[str, int]:
    """Map every logical field to its zero-based column, or NOT_FOUND."""
    lookup = {}
    for index, header in enumerate(headers or []):
        # First occurrence wins, same as a list index() search.
        lookup.setdefault(normalize_header(header), index)
    return {
        field: lookup.get(normalize_header(variant.header_for(field)), NOT_FOUND)
        for field in FIELDS
    }
