"""Vaultmarks - generate and maintain an Obsidian bookmarks file from a vault's notes."""

from vaultmarks.bookmarks import (
    BookmarkGenerator,
    BookmarkScanner,
    Document,
    FileNode,
    GroupNode,
    create_generator,
    merge_items,
)
from vaultmarks.config import VaultmarksConfig, load_config

__version__ = "0.1.0"

__all__ = [
    "BookmarkGenerator",
    "BookmarkScanner",
    "Document",
    "FileNode",
    "GroupNode",
    "VaultmarksConfig",
    "create_generator",
    "load_config",
    "merge_items",
]
