from __future__ import annotations

from typing import Iterable

from .models import FOLDER, DocumentNode, DocumentTreeNode
from .storage_paths import strip_diacritics


def document_sort_key(document: DocumentNode) -> tuple[int, str, str, str]:
    """Folders first, then accent/case-insensitive name, then exact name and id."""
    kind_rank = 0 if document.kind == FOLDER else 1
    collated = strip_diacritics(document.name).casefold()
    return (kind_rank, collated, document.name, document.id)


def build_document_tree(documents: Iterable[DocumentNode]) -> list[DocumentTreeNode]:
    """
    Turn a flat list of one company's documents into an ordered forest.

    A document whose parent is absent from the input is treated as a root, so
    the forest stays renderable when a parent row disappears mid-fetch. Rows
    caught in a parent cycle are also lifted to the root.
    """
    nodes = {document.id: DocumentTreeNode(document=document) for document in documents}
    parents = {
        node_id: node.document.parent_id
        for node_id, node in nodes.items()
        if node.document.parent_id in nodes
    }
    cyclic = _cycle_members(parents)

    roots: list[DocumentTreeNode] = []
    for node_id, node in nodes.items():
        parent_id = parents.get(node_id)
        if parent_id is None or node_id in cyclic:
            roots.append(node)
        else:
            nodes[parent_id].children.append(node)

    _sort_forest(roots)
    return roots


def flatten_tree(forest: list[DocumentTreeNode]) -> list[DocumentNode]:
    """Pre-order listing of a forest."""
    flat: list[DocumentNode] = []
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        flat.append(node.document)
        stack.extend(reversed(node.children))
    return flat


def _sort_forest(roots: list[DocumentTreeNode]) -> None:
    pending = [roots]
    while pending:
        siblings = pending.pop()
        siblings.sort(key=lambda node: document_sort_key(node.document))
        pending.extend(node.children for node in siblings if node.children)


def _cycle_members(parents: dict[str, str]) -> set[str]:
    visited: set[str] = set()
    members: set[str] = set()
    for start in parents:
        if start in visited:
            continue
        path: list[str] = []
        on_path: dict[str, int] = {}
        current: str | None = start
        while current is not None and current not in visited:
            on_path[current] = len(path)
            path.append(current)
            visited.add(current)
            current = parents.get(current)
            if current in on_path:
                members.update(path[on_path[current]:])
                break
    return members
