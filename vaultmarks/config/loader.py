"""Locate vaultmarks.yaml, expand ${VAR} references and validate it."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import VaultmarksConfig

PROJECT_CONFIG = "vaultmarks.yaml"
_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths(cli_path: str | None = None) -> list[Path]:
    """Candidate files, most specific first: --config, project, user."""
    paths = [Path(cli_path)] if cli_path else []
    paths.append(Path.cwd() / PROJECT_CONFIG)
    paths.append(Path.home() / ".vaultmarks" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> VaultmarksConfig:
    """Return the first non-empty config found, or the defaults."""
    for path in config_search_paths(cli_path):
        if not path.is_file():
            continue
        raw = _read_mapping(path)
        if raw is None:
            continue
        try:
            return VaultmarksConfig.model_validate(_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e
    return VaultmarksConfig()


def _read_mapping(path: Path) -> dict | None:
    """Parse *path* as YAML; None for an empty file, ValueError for anything but a mapping."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if data is None or isinstance(data, dict):
        return data
    raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(data).__name__}")


def _expand_env_vars(value: object) -> object:
    """Substitute ${VAR} in every string of a parsed YAML document; unset vars become ''."""
    if isinstance(value, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {key: _expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    return value


# Default YAML template for `vaultmarks config init`
DEFAULT_CONFIG_TEMPLATE = """\
# vaultmarks.yaml

# Vault root (may reference env vars, e.g. "${HOME}/notes")
vault_path: "."

# Scanning
scan:
  hidden_prefix: "."
  skip_assets: true            # drop "assets" and "*_assets" directories
  asset_dir_names: ["assets"]
  asset_dir_suffixes: ["_assets"]
  extensions: ["md"]

# Bookmark file
bookmarks:
  config_dir: ".obsidian"
  file_name: "bookmarks.json"
  merge_with_existing: true    # keep the order of an existing bookmarks.json
  indent: 2

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
