from __future__ import annotations

import argparse
from pathlib import Path

from dotenv import load_dotenv

_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)

from portfolio_docs.container import build_services
from portfolio_docs.domain.models import FILE, DocumentTreeNode
from portfolio_docs.logging_config import configure_logging


def _print_nodes(nodes: list[DocumentTreeNode], depth: int) -> None:
    for node in nodes:
        indent = "  " * depth
        if node.kind == FILE:
            print(f"{indent}{node.name}  [{node.document.size_bytes} bytes, {node.id}]")
        else:
            print(f"{indent}{node.name}/  [{node.id}]")
            _print_nodes(node.children, depth + 1)


def main() -> None:
    parser = argparse.ArgumentParser(description="Print the document tree of a company.")
    parser.add_argument("company_id")
    args = parser.parse_args()

    configure_logging()
    service = build_services()["document_store_service"]
    tree = service.get_tree(args.company_id)
    if not tree:
        raise SystemExit(f"No documents for company {args.company_id}.")
    _print_nodes(tree, 0)


if __name__ == "__main__":
    main()
