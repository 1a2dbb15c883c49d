from __future__ import annotations

import json
import logging
import threading
from collections import Counter
from pathlib import Path
from typing import Any, Iterable, Optional, Protocol, Sequence

import yaml
from pydantic import ValidationError

from .errors import ConfigurationConflictError, StoreUnavailableError
from .models import ConfigurationEntry, ConfigValue

logger = logging.getLogger(__name__)


class ConfigurationStore(Protocol):
    def get_by_name(self, name: str) -> Optional[ConfigurationEntry]:
        """Return the entry whose key equals `name` exactly, or None."""
        ...

    def get_all(self) -> Sequence[ConfigurationEntry]:
        """Return one consistent snapshot of every entry."""
        ...


def ensure_unique_keys(entries: Iterable[ConfigurationEntry]) -> None:
    counts = Counter(entry.key for entry in entries)
    duplicates = [key for key, count in counts.items() if count > 1]
    if duplicates:
        raise ConfigurationConflictError(duplicates)


def _single_match(entries: Sequence[ConfigurationEntry], name: str) -> Optional[ConfigurationEntry]:
    matches = [entry for entry in entries if entry.key == name]
    if len(matches) > 1:
        raise ConfigurationConflictError([name])
    return matches[0] if matches else None


def default_entries() -> tuple[ConfigurationEntry, ...]:
    """Reference configuration: both length limits on, character check off."""
    return (
        ConfigurationEntry(key="MinLengthPolicy", value=3),
        ConfigurationEntry(key="MaxLengthPolicy", value=20),
        ConfigurationEntry(key="OnlyAlphanumericCharacters", active=False),
    )


class InMemoryConfigurationStore:
    def __init__(self, entries: Optional[Iterable[ConfigurationEntry]] = None):
        self._entries: list[ConfigurationEntry] = list(entries or ())
        ensure_unique_keys(self._entries)
        self._lock = threading.Lock()

    @classmethod
    def default(cls) -> "InMemoryConfigurationStore":
        return cls(default_entries())

    def get_by_name(self, name: str) -> Optional[ConfigurationEntry]:
        return _single_match(self.get_all(), name)

    def get_all(self) -> tuple[ConfigurationEntry, ...]:
        with self._lock:
            return tuple(self._entries)

    def put(self, key: str, value: ConfigValue = None, *, active: bool = True) -> ConfigurationEntry:
        """Insert or replace the entry for `key`, keeping its position."""
        entry = ConfigurationEntry(key=key, value=value, active=active)
        with self._lock:
            for idx, existing in enumerate(self._entries):
                if existing.key == key:
                    self._entries[idx] = entry
                    break
            else:
                self._entries.append(entry)
        return entry

    def set_active(self, key: str, active: bool) -> ConfigurationEntry:
        with self._lock:
            for idx, existing in enumerate(self._entries):
                if existing.key == key:
                    updated = existing.model_copy(update={"active": active})
                    self._entries[idx] = updated
                    return updated
        raise KeyError(key)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries = [e for e in self._entries if e.key != key]


class FileConfigurationStore:
    """Entries read from a JSON or YAML file with a top-level `entries` list.

    The file is read on every call, so each `get_all()` reflects the file as it
    was at that moment. The evaluator reads it once per evaluation and hands each
    rule its entry from that read; only standalone rule calls read it again.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_by_name(self, name: str) -> Optional[ConfigurationEntry]:
        return _single_match(self.get_all(), name)

    def get_all(self) -> tuple[ConfigurationEntry, ...]:
        entries = tuple(_parse_entries(self._read(), source=str(self._path)))
        ensure_unique_keys(entries)
        return entries

    def _read(self) -> Any:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise StoreUnavailableError(f"Policy config file not found: {self._path}", str(self._path)) from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Policy config file unreadable: {self._path} ({exc})", str(self._path)) from exc

        try:
            if self._path.suffix.lower() in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise StoreUnavailableError(f"Policy config file is malformed: {self._path}", str(self._path)) from exc


def _parse_entries(raw: Any, *, source: str) -> list[ConfigurationEntry]:
    if not isinstance(raw, dict) or not isinstance(raw.get("entries"), list):
        raise StoreUnavailableError("Policy config must contain a top-level 'entries' list.", source)

    entries: list[ConfigurationEntry] = []
    for idx, item in enumerate(raw["entries"]):
        try:
            entries.append(ConfigurationEntry.model_validate(item))
        except ValidationError as exc:
            raise StoreUnavailableError(f"Invalid policy config entry #{idx} in {source}: {exc}", source) from exc
    logger.debug("Loaded %d policy config entries from %s", len(entries), source)
    return entries
