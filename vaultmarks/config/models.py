from pydantic import BaseModel, Field
from typing import Literal


class ScanConfig(BaseModel):
    hidden_prefix: str = "."
    skip_assets: bool = True
    asset_dir_names: list[str] = Field(default_factory=lambda: ["assets"])
    asset_dir_suffixes: list[str] = Field(default_factory=lambda: ["_assets"])
    extensions: list[str] = Field(default_factory=lambda: ["md"])


class BookmarkFileConfig(BaseModel):
    config_dir: str = ".obsidian"
    file_name: str = "bookmarks.json"
    merge_with_existing: bool = True
    indent: int = Field(default=2, ge=0)

    @property
    def relative_path(self) -> str:
        return f"{self.config_dir}/{self.file_name}" if self.config_dir else self.file_name


class VaultmarksConfig(BaseModel):
    vault_path: str = "."
    scan: ScanConfig = Field(default_factory=ScanConfig)
    bookmarks: BookmarkFileConfig = Field(default_factory=BookmarkFileConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
