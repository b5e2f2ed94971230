import random

from portfolio_docs.domain.models import File, Folder
from portfolio_docs.domain.tree import build_document_tree, flatten_tree


def _folder(document_id: str, name: str, parent_id: str | None = None) -> Folder:
    return Folder(id=document_id, company_id="c1", name=name, parent_id=parent_id)


def _file(document_id: str, name: str, parent_id: str | None = None) -> File:
    return File(
        id=document_id,
        company_id="c1",
        name=name,
        storage_path=f"c1/1-{document_id}_{name.lower()}",
        size_bytes=1,
        original_file_name=name,
        parent_id=parent_id,
    )


def _shape(forest) -> list:
    return [(node.id, _shape(node.children)) for node in forest]


def _sample_documents() -> list:
    return [
        _file("f1", "a.pdf"),
        _folder("d1", "Zeta"),
        _folder("d2", "alpha"),
        _file("f2", "B.txt"),
        _file("f3", "notes.txt", parent_id="d2"),
        _folder("d3", "Sub", parent_id="d2"),
        _file("f4", "deep.xlsx", parent_id="d3"),
    ]


def test_folders_sort_before_files_then_by_name() -> None:
    forest = build_document_tree(_sample_documents())

    assert [node.name for node in forest] == ["alpha", "Zeta", "a.pdf", "B.txt"]
    alpha = forest[0]
    assert [node.name for node in alpha.children] == ["Sub", "notes.txt"]
    assert [node.name for node in alpha.children[0].children] == ["deep.xlsx"]


def test_name_order_ignores_accents_and_case() -> None:
    forest = build_document_tree(
        [_folder("1", "etude"), _folder("2", "École"), _folder("3", "Ecole2")]
    )
    assert [node.name for node in forest] == ["École", "Ecole2", "etude"]


def test_output_does_not_depend_on_input_order() -> None:
    documents = _sample_documents()
    expected = _shape(build_document_tree(documents))
    rng = random.Random(7)
    for _ in range(10):
        shuffled = list(documents)
        rng.shuffle(shuffled)
        assert _shape(build_document_tree(shuffled)) == expected


def test_build_is_idempotent() -> None:
    documents = _sample_documents()
    assert build_document_tree(documents) == build_document_tree(documents)


def test_every_node_appears_once_and_chains_end_at_root() -> None:
    documents = _sample_documents()
    forest = build_document_tree(documents)

    flat = flatten_tree(forest)
    assert sorted(document.id for document in flat) == sorted(d.id for d in documents)

    parent_of: dict[str, str | None] = {node.id: None for node in forest}
    stack = list(forest)
    while stack:
        node = stack.pop()
        for child in node.children:
            parent_of[child.id] = node.id
            stack.append(child)
    for document in documents:
        steps = 0
        current = document.id
        while parent_of[current] is not None:
            current = parent_of[current]
            steps += 1
            assert steps <= len(documents)


def test_orphan_is_placed_at_root() -> None:
    forest = build_document_tree([_file("f1", "lost.pdf", parent_id="deleted-folder")])
    assert [node.id for node in forest] == ["f1"]


def test_cyclic_rows_are_lifted_to_root() -> None:
    documents = [
        _folder("a", "A", parent_id="b"),
        _folder("b", "B", parent_id="a"),
        _file("c", "inside.pdf", parent_id="a"),
    ]
    forest = build_document_tree(documents)

    assert [node.id for node in forest] == ["a", "b"]
    assert [node.id for node in forest[0].children] == ["c"]
    assert len(flatten_tree(forest)) == 3


def test_deep_chain_builds_without_recursion() -> None:
    depth = 3000
    documents = [_folder("n0", "level-0")]
    documents += [_folder(f"n{i}", f"level-{i}", parent_id=f"n{i - 1}") for i in range(1, depth)]
    forest = build_document_tree(reversed(documents))

    assert len(forest) == 1
    assert len(flatten_tree(forest)) == depth


def test_empty_input_gives_empty_forest() -> None:
    assert build_document_tree([]) == []
