"""Order-preserving merge of an old bookmark tree into a freshly scanned one."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from vaultmarks.bookmarks.models import FileNode, GroupNode, MergeStats

AnyNode = FileNode | GroupNode


def identity_key(node: AnyNode) -> str:
    """Nodes are the same bookmark iff both type and path match."""
    return f"{node.type}:{node.path}"


def merge_items(old: Sequence[AnyNode], fresh: Sequence[AnyNode]) -> list[AnyNode]:
    """Merge *old* into *fresh*, keeping old positions and fresh content.

    Nodes present in both keep the order they had in *old*; groups present in
    both have their children merged the same way. Nodes only in *fresh* are
    appended in scan order, nodes only in *old* are dropped. Neither input is
    mutated.
    """
    fresh_by_key = {identity_key(node): node for node in fresh}
    consumed: set[str] = set()
    result: list[AnyNode] = []

    for old_node in old:
        key = identity_key(old_node)
        new_node = fresh_by_key.get(key)
        if new_node is None or key in consumed:
            continue
        if isinstance(old_node, GroupNode) and isinstance(new_node, GroupNode):
            new_node = new_node.model_copy(
                update={"items": merge_items(old_node.items, new_node.items)}
            )
        result.append(new_node)
        consumed.add(key)

    for new_node in fresh:
        if identity_key(new_node) not in consumed:
            result.append(new_node)

    return result


def _all_keys(nodes: Iterable[AnyNode]) -> set[str]:
    keys: set[str] = set()
    stack = list(nodes)
    while stack:
        node = stack.pop()
        keys.add(identity_key(node))
        if isinstance(node, GroupNode):
            stack.extend(node.items)
    return keys


def diff_stats(old: Sequence[AnyNode], merged: Sequence[AnyNode]) -> MergeStats:
    """Count nodes kept from, added to and dropped from *old* at every depth."""
    old_keys = _all_keys(old)
    new_keys = _all_keys(merged)
    return MergeStats(
        kept=len(old_keys & new_keys),
        added=len(new_keys - old_keys),
        dropped=len(old_keys - new_keys),
        total=len(new_keys),
    )
