"""Read-only access to a vault's directory tree and file timestamps."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class VaultEntry(Protocol):
    """A file or directory in a vault, addressed by a vault-relative path."""

    @property
    def name(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def is_dir(self) -> bool: ...

    @property
    def extension(self) -> str: ...

    def children(self) -> Iterator[VaultEntry]: ...


@dataclass(frozen=True)
class TimestampLookup:
    """Outcome of a creation-time lookup. ``error`` is set when it failed."""

    millis: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@runtime_checkable
class TimestampProvider(Protocol):
    def creation_time(self, entry: VaultEntry) -> TimestampLookup: ...


@dataclass(frozen=True)
class LocalEntry:
    """A :class:`VaultEntry` backed by the local file system."""

    root: Path
    abs_path: Path

    @property
    def name(self) -> str:
        return self.abs_path.name

    @property
    def path(self) -> str:
        if self.abs_path == self.root:
            return ""
        return self.abs_path.relative_to(self.root).as_posix()

    @property
    def is_dir(self) -> bool:
        return self.abs_path.is_dir()

    @property
    def extension(self) -> str:
        suffix = self.abs_path.suffix
        return suffix[1:] if suffix else ""

    def children(self) -> Iterator[LocalEntry]:
        for child in self.abs_path.iterdir():
            yield LocalEntry(root=self.root, abs_path=child)


class LocalVault:
    """Entry point for scanning a vault directory on disk."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).resolve()
        if not self.root.is_dir():
            raise ValueError(f"Vault path is not a directory: {self.root}")

    def root_entry(self) -> LocalEntry:
        return LocalEntry(root=self.root, abs_path=self.root)

    def resolve(self, rel_path: str) -> Path:
        """Map a vault-relative path to an absolute one, refusing escapes."""
        target = (self.root / rel_path).resolve()
        if not target.is_relative_to(self.root):
            raise ValueError(f"Path escapes vault: {rel_path}")
        return target


class StatTimestampProvider:
    """Creation time from ``os.stat``, preferring the birth time when reported."""

    def __init__(self, vault: LocalVault) -> None:
        self.vault = vault

    def creation_time(self, entry: VaultEntry) -> TimestampLookup:
        try:
            st = os.stat(self.vault.resolve(entry.path))
        except (OSError, ValueError) as e:
            return TimestampLookup(error=str(e))
        seconds = getattr(st, "st_birthtime", None) or st.st_ctime
        return TimestampLookup(millis=max(0, int(seconds * 1000)))
