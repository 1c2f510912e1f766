"""Read-only view over the external key/secret registry."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from src.federation.core.models import ExternalRecord

_COMMENT_MARKERS = ("#", "!")


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` (or ``key: value``) lines.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. A line
    with no separator maps the key to an empty secret. Later keys win.
    Leading whitespace of a value is dropped, trailing whitespace is part of
    the secret.
    """
    entries: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.lstrip()
        if not line.strip() or line.startswith(_COMMENT_MARKERS):
            continue

        separators = [i for i in (line.find("="), line.find(":")) if i >= 0]
        if not separators:
            entries[line.rstrip()] = ""
            continue

        index = min(separators)
        key = line[:index].strip()
        if not key:
            logger.warning("Ignoring registry line without a key: {!r}", raw_line)
            continue
        entries[key] = line[index + 1 :].lstrip()
    return entries


class ExternalRegistry:
    """Immutable external_id -> secret lookup.

    Loaded once; edits to the underlying file are not picked up by an existing
    instance. Iteration follows the order of the source.
    """

    def __init__(self, entries: Mapping[str, str] | None = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_mapping(cls, entries: Mapping[str, str]) -> ExternalRegistry:
        return cls(entries)

    @classmethod
    def from_properties(cls, path: str | Path) -> ExternalRegistry:
        """Load a registry file.

        A missing or unreadable file leaves the registry empty; the provider
        still starts.
        """
        path = Path(path)
        if not path.exists():
            logger.warning("Could not find registry file {}", path)
            return cls()

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to load registry file {}: {}", path, e)
            return cls()

        entries = parse_properties(text)
        logger.info("Loaded {} registry entries from {}", len(entries), path)
        return cls(entries)

    def get_secret(self, external_id: str) -> str | None:
        return self._entries.get(external_id)

    def get(self, external_id: str) -> ExternalRecord | None:
        secret = self._entries.get(external_id)
        if secret is None:
            return None
        return ExternalRecord(external_id=external_id, secret=secret)

    def records(self) -> Iterator[ExternalRecord]:
        for external_id, secret in self._entries.items():
            yield ExternalRecord(external_id=external_id, secret=secret)

    def __contains__(self, external_id: object) -> bool:
        return external_id in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ExternalRegistry({len(self)} entries)"
