from dataclasses import dataclass, field
from typing import Any, List, Optional


class CatalogError(Exception):
    """Base class for failures reported back to the catalog UI."""

    kind = "error"


class ConfigurationError(CatalogError):
    kind = "configuration"


class SheetPermissionError(CatalogError):
    kind = "permission"

    def __init__(self, message, service_account_email=None):
        super().__init__(message)
        self.service_account_email = service_account_email


class NotFoundError(CatalogError):
    kind = "not_found"


class RowNotFoundError(NotFoundError):
    """A card key no longer matches any row of the refreshed sheet."""


class UploadError(CatalogError):
    kind = "upload"


class WriteError(CatalogError):
    kind = "write"


class DeleteError(CatalogError):
    kind = "delete"


class ValidationError(CatalogError):
    kind = "validation"

    def __init__(self, errors):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class BusyError(CatalogError):
    kind = "busy"


@dataclass
class ActionResult:
    success: bool
    message: str = ""
    error_kind: Optional[str] = None
    data: Any = None
    dropped_fields: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, message="", data=None, dropped_fields=None):
        return cls(True, message, None, data, list(dropped_fields or []))

    @classmethod
    def failed(cls, error: CatalogError):
        return cls(False, str(error), error.kind)
