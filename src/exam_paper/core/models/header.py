"""
Module: header

Purpose:
    Free-form header metadata printed at the top of every paper.
    Frozen so that each render captures a value snapshot; edits produce
    a new instance.

Key Classes:
    - HeaderMetadata: schoolName, subject, date, watermark

Used By:
    - builder.layout.composer: Header block
    - host.preview_host: Editable state
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional


# Form field names (as sent by the input form) -> attribute names
FIELD_ALIASES: Dict[str, str] = {
    "schoolName": "school_name",
    "school_name": "school_name",
    "subject": "subject",
    "date": "date",
    "watermark": "watermark",
}


@dataclass(frozen=True)
class HeaderMetadata:
    """
    Header fields for a generated paper (immutable).

    All fields are plain text and default to the empty string.
    The watermark is carried through to the page description; the
    composer never prints it as body text.

    Example:
        >>> header = HeaderMetadata(school_name="Lincoln High", subject="Math")
        >>> header.with_field("date", "2024-05-01").date
        '2024-05-01'
    """

    school_name: str = ""
    subject: str = ""
    date: str = ""
    watermark: str = ""

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                object.__setattr__(self, f.name, "")
            elif not isinstance(value, str):
                object.__setattr__(self, f.name, str(value))

    def with_field(self, name: str, value: Optional[str]) -> HeaderMetadata:
        """
        Return a copy with one field replaced.

        Args:
            name: Form name ("schoolName") or attribute name ("school_name")
            value: New text (None becomes "")

        Raises:
            KeyError: If the field name is unknown
        """
        attr = resolve_field_name(name)
        return replace(self, **{attr: "" if value is None else value})

    def to_dict(self) -> Dict[str, str]:
        """Serialize using the form field names."""
        return {
            "schoolName": self.school_name,
            "subject": self.subject,
            "date": self.date,
            "watermark": self.watermark,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> HeaderMetadata:
        """
        Build from a mapping; unknown keys are ignored.

        Accepts both form names and attribute names.
        """
        if not data:
            return cls()
        values: Dict[str, Any] = {}
        for key, value in data.items():
            attr = FIELD_ALIASES.get(key)
            if attr is not None:
                values[attr] = value
        return cls(**values)


def resolve_field_name(name: str) -> str:
    """Map a form or attribute field name to the attribute name."""
    try:
        return FIELD_ALIASES[name]
    except KeyError:
        raise KeyError(f"Unknown header field: {name!r}") from None
