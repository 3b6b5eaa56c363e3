"""City domain entity - pure business logic."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from listycity.constants import FIELD_NAME, FIELD_PROVINCE


def safe_trim(value: Optional[str]) -> str:
    """Trim a possibly missing string, mapping None to ""."""
    return "" if value is None else value.strip()


def _field_as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class City:
    """City domain entity.

    The name doubles as the remote document key, so an update that changes
    the name is a different document.
    """
    name: str
    province: str = ""

    def is_valid(self) -> bool:
        """Validate city business rules."""
        return bool(safe_trim(self.name))

    @property
    def document_key(self) -> str:
        """Key of the remote document holding this city."""
        return safe_trim(self.name)

    @property
    def label(self) -> str:
        """Row / dialog title text, e.g. "Calgary (AB)"."""
        return f"{self.name} ({self.province})"

    def cleaned(self) -> "City":
        """Return a copy with both fields trimmed."""
        return City(name=safe_trim(self.name), province=safe_trim(self.province))

    def to_dict(self) -> Dict[str, str]:
        """Convert to the remote document fields."""
        return {FIELD_NAME: self.name, FIELD_PROVINCE: self.province}

    @classmethod
    def from_document(cls, data: Optional[Dict[str, Any]]) -> "City":
        """Build a city from raw document fields.

        Missing fields become "", non-string values are converted with str().
        """
        data = data or {}
        return cls(
            name=_field_as_string(data.get(FIELD_NAME)),
            province=_field_as_string(data.get(FIELD_PROVINCE)),
        )
