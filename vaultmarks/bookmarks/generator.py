"""Scan, merge and persist a vault's bookmarks file."""

from __future__ import annotations

import logging
import time
from typing import Callable

from pydantic import BaseModel

from vaultmarks.bookmarks.merger import diff_stats, merge_items
from vaultmarks.bookmarks.models import Document
from vaultmarks.bookmarks.scanner import BookmarkScanner
from vaultmarks.bookmarks.store import DocumentStore
from vaultmarks.bookmarks.vault import VaultEntry
from vaultmarks.config.models import BookmarkFileConfig

logger = logging.getLogger(__name__)


class GenerationStats(BaseModel):
    items: int = 0
    kept: int = 0
    added: int = 0
    dropped: int = 0


class GenerationReport(BaseModel):
    success: bool
    path: str
    document: Document | None = None
    error: str | None = None
    merged: bool = False
    written: bool = False
    stats: GenerationStats = GenerationStats()
    duration: float = 0.0


class BookmarkGenerator:
    def __init__(
        self,
        root: VaultEntry,
        scanner: BookmarkScanner,
        store: DocumentStore,
        config: BookmarkFileConfig,
        notify: Callable[[str], None] | None = None,
    ):
        """
        Args:
            root: Vault root entry to scan
            scanner: BookmarkScanner configured with filter rules and timestamps
            store: DocumentStore the bookmarks file is read from and written to
            config: BookmarkFileConfig naming the destination file
            notify: Optional callback receiving a one-line outcome message
        """
        self.root = root
        self.scanner = scanner
        self.store = store
        self.config = config
        self.notify = notify

    @property
    def path(self) -> str:
        return self.config.relative_path

    # -- Public API ----------------------------------------------------------

    def generate(self, merge_with_existing: bool | None = None, dry_run: bool = False) -> GenerationReport:
        """Scan the vault and write the bookmarks file. Never raises."""
        if merge_with_existing is None:
            merge_with_existing = self.config.merge_with_existing
        start = time.monotonic()

        try:
            fresh = self.scanner.scan(self.root)
            old = self._load_existing() if merge_with_existing else None

            if old is not None:
                final = Document(items=merge_items(old.items, fresh.items))
                stats = diff_stats(old.items, final.items)
            else:
                final = fresh
                stats = diff_stats([], final.items)

            report = GenerationReport(
                success=True,
                path=self.path,
                document=final,
                merged=old is not None,
                stats=GenerationStats(
                    items=stats.total,
                    kept=stats.kept,
                    added=stats.added,
                    dropped=stats.dropped,
                ),
            )

            if not dry_run:
                self.store.write(self.path, final.to_json(indent=self.config.indent))
                report.written = True
                logger.info(f"Bookmark file generated: {self.path}")
        except Exception as exc:
            logger.exception(f"Failed to generate bookmark file {self.path}")
            report = GenerationReport(success=False, path=self.path, error=str(exc))

        report.duration = time.monotonic() - start
        if not report.success:
            self._notify(f"Failed to generate bookmark file: {report.error}")
        elif report.written:
            self._notify(f"Bookmark file generated: {self.path}")
        return report

    # -- Internals -----------------------------------------------------------

    def _load_existing(self) -> Document | None:
        """Read the current bookmarks file; any failure means there is none."""
        try:
            if not self.store.exists(self.path):
                return None
            return Document.from_json(self.store.read(self.path))
        except (OSError, ValueError) as exc:
            logger.error(
                f"Failed to read or parse old {self.path}, using newly generated structure: {exc}"
            )
            return None

    def _notify(self, message: str) -> None:
        if self.notify is None:
            return
        try:
            self.notify(message)
        except Exception as exc:
            logger.error(f"Notification callback failed: {exc}")
