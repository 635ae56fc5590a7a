"""Data models for the bookmark tree."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class FileNode(BaseModel):
    """A bookmarked markdown note."""

    type: Literal["file"] = "file"
    ctime: int = Field(default=0, ge=0)
    path: str


class GroupNode(BaseModel):
    """A bookmark group mirroring a vault directory."""

    type: Literal["group"] = "group"
    ctime: int = Field(default=0, ge=0)
    title: str
    path: str
    items: list[Node] = Field(default_factory=list)


Node = Annotated[Union[FileNode, GroupNode], Field(discriminator="type")]

# Support for recursive model
GroupNode.model_rebuild()


class Document(BaseModel):
    """Root of a bookmarks file. Has no path or title of its own."""

    items: list[Node] = Field(default_factory=list)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str) -> Document:
        """Parse a persisted bookmarks file, skipping entries we don't manage.

        Raises ValueError when the text is not JSON, nests too deeply to
        load, or the top-level ``items`` is missing or not a list.
        """
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError(f"Bookmark file is not valid JSON: {e}") from e
        except RecursionError as e:
            raise ValueError("Bookmark file is nested too deeply") from e
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise ValueError("Bookmark file has no 'items' list")
        try:
            return cls(items=_load_nodes(data["items"]))
        except RecursionError as e:
            raise ValueError("Bookmark file is nested too deeply") from e


def _coerce_ctime(value: object) -> int:
    """Old files may carry float, negative or null ctimes; only position matters."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return int(value)


def _load_nodes(raw_items: list) -> list[FileNode | GroupNode]:
    nodes: list[FileNode | GroupNode] = []
    for raw in raw_items:
        if not isinstance(raw, dict):
            logger.debug("Skipping non-object bookmark entry: %r", raw)
            continue
        kind = raw.get("type")
        path = raw.get("path")
        if kind not in ("file", "group"):
            logger.debug("Skipping bookmark entry of type %r", kind)
            continue
        if not isinstance(path, str):
            logger.debug("Skipping %s entry without a path: %r", kind, raw)
            continue

        ctime = _coerce_ctime(raw.get("ctime"))
        if kind == "file":
            nodes.append(FileNode(ctime=ctime, path=path))
        else:
            title = raw.get("title")
            children = raw.get("items")
            nodes.append(GroupNode(
                ctime=ctime,
                title=title if isinstance(title, str) else "",
                path=path,
                items=_load_nodes(children) if isinstance(children, list) else [],
            ))
    return nodes


@dataclass(frozen=True)
class MergeStats:
    """How a merged tree relates to the tree it was merged from."""

    kept: int = 0
    added: int = 0
    dropped: int = 0
    total: int = 0
