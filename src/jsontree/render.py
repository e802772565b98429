"""Draw a field tree with box-drawing characters.

    root
    ├── age: number
    ├── tags
    │   ├── id: number
    │   └── name: string (optional)
    └── name: string
"""

import sys
from collections.abc import Iterator
from typing import TextIO

from jsontree.schema import FieldInfo, FieldTree

ROOT = "root"
BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "


def _label(name: str, info: FieldInfo) -> str:
    label = name if info.children else f"{name}: {info.type}"
    if info.optional:
        label += " (optional)"
    return label


def _lines(tree: FieldTree, prefix: str) -> Iterator[str]:
    names = sorted(tree)
    for i, name in enumerate(names):
        info = tree[name]
        is_last = i == len(names) - 1

        yield f"{prefix}{LAST_BRANCH if is_last else BRANCH}{_label(name, info)}"
        if info.children:
            yield from _lines(info.children, prefix + (SPACE if is_last else PIPE))


def render(tree: FieldTree) -> str:
    """Render `tree` as text, siblings sorted by name. No trailing newline."""
    return "\n".join([ROOT, *_lines(tree, "")])


def print_tree(tree: FieldTree, file: TextIO | None = None) -> None:
    print(render(tree), file=file or sys.stdout)
