"""Bookmark tree scanning, merging and persistence."""

from pathlib import Path

from vaultmarks.bookmarks.generator import BookmarkGenerator, GenerationReport, GenerationStats
from vaultmarks.bookmarks.merger import diff_stats, identity_key, merge_items
from vaultmarks.bookmarks.models import Document, FileNode, GroupNode, MergeStats, Node
from vaultmarks.bookmarks.scanner import BookmarkScanner
from vaultmarks.bookmarks.store import DocumentStore, LocalDocumentStore
from vaultmarks.bookmarks.vault import (
    LocalVault,
    StatTimestampProvider,
    TimestampLookup,
    TimestampProvider,
    VaultEntry,
)
from vaultmarks.config.models import VaultmarksConfig


def create_generator(
    vault_path: Path | str,
    config: VaultmarksConfig,
    notify=None,
) -> BookmarkGenerator:
    """Wire a BookmarkGenerator for a vault on the local file system."""
    vault = LocalVault(vault_path)
    scanner = BookmarkScanner(config.scan, StatTimestampProvider(vault))
    store = LocalDocumentStore(vault.root)
    return BookmarkGenerator(vault.root_entry(), scanner, store, config.bookmarks, notify=notify)


__all__ = [
    "BookmarkGenerator",
    "BookmarkScanner",
    "Document",
    "DocumentStore",
    "FileNode",
    "GenerationReport",
    "GenerationStats",
    "GroupNode",
    "LocalDocumentStore",
    "LocalVault",
    "MergeStats",
    "Node",
    "StatTimestampProvider",
    "TimestampLookup",
    "TimestampProvider",
    "VaultEntry",
    "create_generator",
    "diff_stats",
    "identity_key",
    "merge_items",
]
