"""
Fehlerarten und Ergebnistyp für den CityJSON-Codec.

Interne Codec-Funktionen werfen ``CityJSONError``. Die öffentlichen
Operationen fangen diesen Fehler an genau einer Stelle und geben ihn als
``Err`` zurück, erfolgreiche Ergebnisse als ``Ok``.
"""

from enum import Enum
from typing import Any, NamedTuple, Union

class ErrorKind(Enum):
    """Fehlerklassen des Codecs."""
    DOCUMENT_PARSE = "document_parse"
    MISSING_FIELD = "missing_field"
    MISSING_PART = "missing_part"
    UNKNOWN_SURFACE_TYPE = "unknown_surface_type"
    INVALID_SURFACE_LABEL = "invalid_surface_label"
    IO = "io"

class CityJSONError(Exception):
    """Fehler beim Kodieren oder Dekodieren eines CityJSON-Dokuments."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.message}"

class Ok(NamedTuple):
    """Erfolgreiches Ergebnis."""
    value: Any

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value

class Err(NamedTuple):
    """Fehlgeschlagenes Ergebnis."""
    error: CityJSONError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self) -> Any:
        raise self.error

Result = Union[Ok, Err]
