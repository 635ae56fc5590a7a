"""Shared test fixtures for Vaultmarks."""

from pathlib import Path

import pytest

from vaultmarks.config.models import VaultmarksConfig


def _write_tree(root: Path, files: dict[str, str]) -> None:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


@pytest.fixture
def sample_config():
    return VaultmarksConfig()


@pytest.fixture
def make_vault(tmp_path):
    """Factory building a vault under tmp_path from {relative_path: content}."""

    def _make(files: dict[str, str], name: str = "vault") -> Path:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        _write_tree(root, files)
        return root

    return _make


@pytest.fixture
def sample_vault(make_vault):
    """A small vault with hidden, asset, empty and non-markdown entries."""
    vault = make_vault({
        "Inbox.md": "# Inbox",
        "Projects/alpha.md": "# Alpha",
        "Projects/Beta.md": "# Beta",
        "Projects/diagram.png": "png",
        "Projects/assets/logo.md": "# Logo",
        "Journal/2024/jan.md": "# Jan",
        "Journal/img_assets/pic.md": "# Pic",
        "Empty/readme.txt": "not markdown",
        ".obsidian/app.json": "{}",
        ".trash/old.md": "# Old",
    })
    return vault
