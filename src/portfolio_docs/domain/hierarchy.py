from __future__ import annotations

from typing import Iterable

from .models import FOLDER, DocumentNode


def index_by_id(documents: Iterable[DocumentNode]) -> dict[str, DocumentNode]:
    return {document.id: document for document in documents}


def children_by_parent(documents: Iterable[DocumentNode]) -> dict[str | None, list[str]]:
    """
    Adjacency map parent_id -> child ids, built once per call.

    Rows whose parent is missing from the set keep their parent_id key; callers
    that need orphan-as-root semantics use the tree builder instead.
    """
    adjacency: dict[str | None, list[str]] = {}
    for document in documents:
        adjacency.setdefault(document.parent_id, []).append(document.id)
    return adjacency


def collect_subtree_ids(root_id: str, adjacency: dict[str | None, list[str]]) -> list[str]:
    """
    Return root_id followed by every descendant id, using an explicit worklist.

    Example:
        adjacency = {None: ["a"], "a": ["b", "c"], "b": ["d"]}
        collect_subtree_ids("a", adjacency)
        # ['a', 'b', 'c', 'd'] (order depends on traversal, contents do not)
    """
    collected: list[str] = []
    seen: set[str] = set()
    stack = [root_id]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        collected.append(current)
        stack.extend(reversed(adjacency.get(current, [])))
    return collected


def ancestor_ids(document_id: str, by_id: dict[str, DocumentNode]) -> list[str]:
    """
    Return the parent chain of document_id, nearest ancestor first.

    Stops at a root, at a parent missing from by_id, or when the chain loops.
    """
    chain: list[str] = []
    seen = {document_id}
    current = by_id.get(document_id)
    while current is not None and current.parent_id is not None:
        parent_id = current.parent_id
        if parent_id in seen or parent_id not in by_id:
            break
        seen.add(parent_id)
        chain.append(parent_id)
        current = by_id[parent_id]
    return chain


def would_create_cycle(
    document_id: str, new_parent_id: str | None, by_id: dict[str, DocumentNode]
) -> bool:
    """True when new_parent_id is document_id itself or one of its descendants."""
    if new_parent_id is None:
        return False
    if new_parent_id == document_id:
        return True
    return document_id in ancestor_ids(new_parent_id, by_id)


def is_folder_of_company(
    document: DocumentNode | None, company_id: str
) -> bool:
    return (
        document is not None
        and document.kind == FOLDER
        and document.company_id == company_id
    )
