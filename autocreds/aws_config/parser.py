"""
AWS Config Parser

Reads and writes the subset of INI that AWS config files use: bracketed
section headers, flat ``key = value`` pairs and ``#`` / ``;`` comments.
Comments and blank lines are dropped on parse. Values are kept as raw
trimmed strings.
"""

import re
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

__all__ = [
    'Section',
    'ConfigDocument',
    'parse_aws_config',
    'stringify_aws_config',
]

_LINE_SPLIT = re.compile(r"\r?\n")
_SECTION_RE = re.compile(r"^\[([^\]]+)\]$")
_KEY_VALUE_RE = re.compile(r"^([^=]+)=(.*)$")


class Section:
    """A single ``[header]`` block and its ordered key/value pairs."""

    def __init__(self, header: str, values: Optional[Mapping[str, str]] = None):
        self.header = header
        self._values: Dict[str, str] = {}
        if values:
            for key, value in values.items():
                self._values[key] = value

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return (self.header == other.header
                and list(self._values.items()) == list(other._values.items()))

    def __repr__(self) -> str:
        return f"Section({self.header!r}, {self._values!r})"

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def keys(self) -> List[str]:
        return list(self._values.keys())

    def items(self) -> List[Tuple[str, str]]:
        return list(self._values.items())

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)


class ConfigDocument:
    """
    Ordered collection of sections keyed by their raw header.

    Headers keep their prefix keyword (``profile dev``, ``sso-session corp``);
    callers decide what a prefix means.
    """

    def __init__(self, sections: Optional[List[Section]] = None):
        self._sections: Dict[str, Section] = {}
        for section in sections or []:
            self._sections[section.header] = section

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, str]]) -> "ConfigDocument":
        """Build a document from a ``{header: {key: value}}`` mapping."""
        return cls([Section(header, values) for header, values in data.items()])

    def __contains__(self, header: object) -> bool:
        return header in self._sections

    def __getitem__(self, header: str) -> Section:
        return self._sections[header]

    def __iter__(self) -> Iterator[str]:
        return iter(self._sections)

    def __len__(self) -> int:
        return len(self._sections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigDocument):
            return NotImplemented
        return list(self._sections.values()) == list(other._sections.values())

    def __repr__(self) -> str:
        return f"ConfigDocument({list(self._sections.values())!r})"

    def get(self, header: str) -> Optional[Section]:
        return self._sections.get(header)

    def sections(self) -> List[str]:
        """Return the section headers in file order."""
        return list(self._sections.keys())

    def open_section(self, header: str) -> Section:
        """Return the section for ``header``, appending an empty one if needed."""
        section = self._sections.get(header)
        if section is None:
            section = Section(header)
            self._sections[header] = section
        return section

    def set_section(self, header: str, values: Mapping[str, str]) -> Section:
        """
        Replace the content of ``header`` with exactly ``values``.

        An existing section keeps its position in the document; a new one is
        appended at the end.
        """
        section = Section(header, values)
        self._sections[header] = section
        return section

    def copy(self) -> "ConfigDocument":
        return ConfigDocument([Section(s.header, s.to_dict()) for s in self._sections.values()])

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {header: section.to_dict() for header, section in self._sections.items()}


def parse_aws_config(content: str) -> ConfigDocument:
    """
    Parse AWS config file content.

    Malformed lines are skipped without error. A header seen a second time
    reopens the earlier section, so its keys are merged rather than
    duplicated.

    Args:
        content: Text of the config file (``\\n`` or ``\\r\\n`` line endings)

    Returns:
        ConfigDocument with sections and keys in file order
    """
    document = ConfigDocument()
    current: Optional[Section] = None

    for line in _LINE_SPLIT.split(content):
        trimmed = line.strip()

        # Skip empty lines and comments
        if not trimmed or trimmed.startswith("#") or trimmed.startswith(";"):
            continue

        section_match = _SECTION_RE.match(trimmed)
        if section_match:
            current = document.open_section(section_match.group(1))
            continue

        key_value_match = _KEY_VALUE_RE.match(trimmed)
        if key_value_match and current is not None:
            key = key_value_match.group(1).strip()
            value = key_value_match.group(2).strip()
            current[key] = value

    return document


def stringify_aws_config(document: ConfigDocument) -> str:
    """
    Serialize a document back into AWS config text.

    Each section is written as its header, one ``key = value`` line per key
    and an empty separator line. An empty document gives an empty string.
    """
    lines: List[str] = []

    for header in document:
        lines.append(f"[{header}]")
        for key, value in document[header].items():
            lines.append(f"{key} = {value}")
        lines.append("")

    return "\n".join(lines)
