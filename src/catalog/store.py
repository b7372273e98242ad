import os
import json
import time
from dataclasses import asdict, dataclass
from typing import List, Optional

import config
from catalog.errors import ConfigurationError
from core import logger as log

log = log.get_logger()

DEFAULT_CONFIG_ID = "default-sheet-1"
IMUSICIAN_CONFIG_ID = "i-musician-sheet"
BASE_DISPLAY_NAME = "MULTIPLE STUDIOS"
THEMES = ("light", "dark")


@dataclass
class SheetConfig:
    config_id: str
    display_name: str
    spreadsheet_id: str
    sheet_name: str
    is_deletable: bool = True

    def to_json(self):
        return {
            "configId": self.config_id,
            "displayName": self.display_name,
            "spreadsheetId": self.spreadsheet_id,
            "sheetName": self.sheet_name,
            "isDeletable": self.is_deletable,
        }

    @classmethod
    def from_json(cls, data):
        return cls(
            config_id=str(data["configId"]),
            display_name=str(data.get("displayName", "")),
            spreadsheet_id=str(data.get("spreadsheetId", "")),
            sheet_name=str(data.get("sheetName", "")),
            is_deletable=bool(data.get("isDeletable", True)),
        )


def seeded_configs():
    return [
        SheetConfig(
            config_id=DEFAULT_CONFIG_ID,
            display_name=BASE_DISPLAY_NAME,
            spreadsheet_id=config.GOOGLE_SPREADSHEET_ID,
            sheet_name=config.GOOGLE_SHEET_NAME,
            is_deletable=False,
        ),
        SheetConfig(
            config_id=IMUSICIAN_CONFIG_ID,
            display_name="I MUSICIAN",
            spreadsheet_id=config.IMUSICIAN_SPREADSHEET_ID,
            sheet_name=config.IMUSICIAN_SHEET_NAME,
            is_deletable=True,
        ),
    ]


class ConfigStore:
    """Data sources, the active source and the theme, persisted as one JSON file.

    State is read once by load() and written by save(); mutators only change
    memory so callers decide when to persist.
    """

    def __init__(self, path=None):
        self.path = path or config.CONFIG_STORE_PATH
        self.sources: List[SheetConfig] = []
        self.active_id = DEFAULT_CONFIG_ID
        self.theme = "light"

    def load(self):
        log.debug(f"Loading catalog state from {self.path}")
        stored = {}
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    stored = json.load(f)
                if not isinstance(stored, dict):
                    raise ValueError("state file is not a JSON object")
            except (OSError, ValueError) as e:
                log.error(f"Error reading catalog state from {self.path}: {e}")
                stored = {}

        sources = []
        for item in stored.get("managedSpreadsheets") or []:
            try:
                sources.append(SheetConfig.from_json(item))
            except (KeyError, TypeError, AttributeError) as e:
                log.warning(f"Skipping malformed data source {item!r}: {e}")

        # Seeded sources always exist and always carry their current settings.
        default, imusician = seeded_configs()
        sources = self._upsert(sources, default, 0)
        position = next(i for i, s in enumerate(sources) if s.config_id == DEFAULT_CONFIG_ID) + 1
        sources = self._upsert(sources, imusician, position)

        unique = []
        seen = set()
        for source in sources:
            if source.config_id not in seen:
                seen.add(source.config_id)
                unique.append(source)
        self.sources = unique

        active_id = stored.get("activeSpreadsheetConfigId")
        self.active_id = active_id if self.get(active_id) else DEFAULT_CONFIG_ID
        theme = stored.get("theme")
        self.theme = theme if theme in THEMES else "light"
        log.info(f"Loaded {len(self.sources)} data sources, active={self.active_id}")
        return self

    @staticmethod
    def _upsert(sources, seeded, position):
        for i, source in enumerate(sources):
            if source.config_id == seeded.config_id:
                sources[i] = seeded
                return sources
        sources.insert(position, seeded)
        return sources

    def save(self):
        state = {
            "managedSpreadsheets": [s.to_json() for s in self.sources],
            "activeSpreadsheetConfigId": self.active_id,
            "theme": self.theme,
        }
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)
        log.debug(f"Saved catalog state to {self.path}")

    def get(self, config_id) -> Optional[SheetConfig]:
        for source in self.sources:
            if source.config_id == config_id:
                return source
        return None

    @property
    def active(self) -> Optional[SheetConfig]:
        return (
            self.get(self.active_id)
            or self.get(DEFAULT_CONFIG_ID)
            or (self.sources[0] if self.sources else None)
        )

    def set_active(self, config_id):
        if not self.get(config_id):
            raise ConfigurationError(f"Unknown data source: {config_id}")
        self.active_id = config_id
        return self.active

    def suggest_display_name(self):
        """MULTIPLE STUDIOS, then MULTIPLE STUDIOS 2, 3, ... once the base name is taken."""
        names = [s.display_name for s in self.sources]
        if BASE_DISPLAY_NAME not in names:
            return BASE_DISPLAY_NAME
        max_num = 1
        prefix = f"{BASE_DISPLAY_NAME} "
        for name in names:
            if name.startswith(prefix) and name[len(prefix) :].isdigit():
                max_num = max(max_num, int(name[len(prefix) :]))
        return f"{prefix}{max_num + 1}"

    def add_source(self, display_name, spreadsheet_id, sheet_name):
        if not display_name.strip() or not spreadsheet_id.strip() or not sheet_name.strip():
            raise ConfigurationError("Display name, spreadsheet ID and sheet name are all required.")
        stamp = int(time.time() * 1000)
        while self.get(f"custom-{stamp}"):
            stamp += 1
        source = SheetConfig(
            config_id=f"custom-{stamp}",
            display_name=display_name.strip(),
            spreadsheet_id=spreadsheet_id.strip(),
            sheet_name=sheet_name.strip(),
            is_deletable=True,
        )
        self.sources.append(source)
        self.active_id = source.config_id
        log.info(f"Added data source '{source.display_name}' ({source.config_id})")
        return source

    def delete_source(self, config_id):
        if len(self.sources) <= 1:
            raise ConfigurationError("The last data source cannot be deleted.")
        source = self.get(config_id)
        if not source or not source.is_deletable:
            raise ConfigurationError("Default or predefined data sources cannot be deleted.")
        self.sources = [s for s in self.sources if s.config_id != config_id]
        if self.active_id == config_id:
            fallback = self.get(DEFAULT_CONFIG_ID) or self.sources[0]
            self.active_id = fallback.config_id
        log.info(f"Deleted data source '{source.display_name}' ({config_id})")
        return source

    def toggle_theme(self):
        self.theme = "dark" if self.theme == "light" else "light"
        return self.theme

    def as_dict(self):
        return {
            "sources": [asdict(s) for s in self.sources],
            "active_id": self.active_id,
            "theme": self.theme,
        }
