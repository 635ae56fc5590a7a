"""Depth-first vault walker producing a fresh bookmark tree."""

from __future__ import annotations

import logging
import unicodedata

from vaultmarks.bookmarks.models import Document, FileNode, GroupNode
from vaultmarks.bookmarks.vault import TimestampProvider, VaultEntry
from vaultmarks.config.models import ScanConfig

logger = logging.getLogger(__name__)


def sort_key(name: str) -> tuple[str, str]:
    """Collation used for siblings: accent-decomposed, case-folded, then raw name."""
    return unicodedata.normalize("NFKD", name).casefold(), name


class BookmarkScanner:
    """Builds a :class:`Document` from a vault directory tree."""

    def __init__(self, config: ScanConfig, timestamps: TimestampProvider) -> None:
        self.config = config
        self.timestamps = timestamps

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def is_hidden(self, entry: VaultEntry) -> bool:
        prefix = self.config.hidden_prefix
        return bool(prefix) and entry.name.startswith(prefix)

    def is_assets_dir(self, entry: VaultEntry) -> bool:
        name = entry.name
        return name in self.config.asset_dir_names or any(
            name.endswith(suffix) for suffix in self.config.asset_dir_suffixes
        )

    def is_markdown(self, entry: VaultEntry) -> bool:
        return entry.extension in self.config.extensions

    def _eligible_children(self, folder: VaultEntry) -> list[VaultEntry]:
        try:
            children = list(folder.children())
        except OSError as e:
            logger.warning("Failed to list %s, skipping it: %s", folder.path or "/", e)
            return []

        kept = []
        for child in children:
            if self.is_hidden(child):
                continue
            if self.config.skip_assets and child.is_dir and self.is_assets_dir(child):
                continue
            kept.append(child)
        kept.sort(key=lambda c: sort_key(c.name))
        return kept

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------

    def scan(self, root: VaultEntry) -> Document:
        """Walk *root* and return the bookmark tree for its markdown notes."""
        return Document(items=self._scan_items(root))

    def _scan_items(self, folder: VaultEntry) -> list[FileNode | GroupNode]:
        items: list[FileNode | GroupNode] = []
        for child in self._eligible_children(folder):
            if child.is_dir:
                group = self._scan_folder(child)
                if group is not None:
                    items.append(group)
            elif self.is_markdown(child):
                items.append(FileNode(ctime=self._ctime(child), path=child.path))
        return items

    def _scan_folder(self, folder: VaultEntry) -> GroupNode | None:
        items = self._scan_items(folder)
        if not items:
            logger.debug("Omitting %s: no eligible notes", folder.path)
            return None
        return GroupNode(
            ctime=self._ctime(folder),
            title=folder.name,
            path=folder.path,
            items=items,
        )

    def _ctime(self, entry: VaultEntry) -> int:
        lookup = self.timestamps.creation_time(entry)
        if not lookup.ok:
            logger.warning(
                "Failed to get creation time for %s, using 0 instead: %s",
                entry.path,
                lookup.error,
            )
            return 0
        return lookup.millis
