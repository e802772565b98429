"""Infer the field structure of JSON objects, including nested structures.

Every object seen at the same position is one container. Fields are merged
across containers, so a list of records becomes a single tree where each field
knows how often it appeared and whether it was ever null.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

type Json = float | int | str | bool | None | list[Json] | dict[str, Json]
type FieldTree = dict[str, FieldInfo]

UNKNOWN = "unknown"
UNKNOWN_ARRAY = "array<unknown>"
PLACEHOLDERS = frozenset({UNKNOWN, UNKNOWN_ARRAY})

logger = logging.getLogger("jsontree")


@dataclass
class FieldInfo:
    """Everything known about one field name at one nesting level.

    `type` is None when the field is described by its `children` (objects and
    arrays of objects). `containers` is how many objects were folded into
    `children`, and bounds how often each child could have appeared.
    """

    type: str | None
    count: int = 1
    has_null: bool = False
    containers: int = 0
    children: FieldTree = field(default_factory=dict)
    optional: bool = False


def is_concrete(type_: str | None) -> bool:
    return type_ is not None and type_ not in PLACEHOLDERS


def classify(value: Any) -> str:
    """Type tag of a single value. Arrays use their first element only."""
    match value:
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case None:
            return UNKNOWN
        case dict():
            return "object"
        case list() if not value:
            return UNKNOWN_ARRAY
        case [first, *_]:
            return f"array<{classify(first)}>"
        case _:
            return UNKNOWN


def _objects_in(value: Json) -> list[dict[str, Json]]:
    match value:
        case dict():
            return [value]
        case list():
            return [item for item in value if isinstance(item, dict)]
        case _:
            return []


def _absorb(info: FieldInfo, objects: list[dict[str, Json]]) -> None:
    for obj in objects:
        children, containers = collect(obj)
        info.containers += containers
        merge_trees(info.children, children)
    if info.children:
        info.type = None


def fold_value(tree: FieldTree, key: str, value: Json) -> None:
    """Record one occurrence of `key` with `value` inside a container."""
    new_type = classify(value)

    if (info := tree.get(key)) is None:
        info = tree[key] = FieldInfo(type=new_type, count=0)
    elif info.type in PLACEHOLDERS and is_concrete(new_type):
        info.type = new_type

    info.count += 1
    if value is None:
        info.has_null = True

    _absorb(info, _objects_in(value))


def merge_field(tree: FieldTree, key: str, incoming: FieldInfo) -> None:
    """Merge a subtree analysed elsewhere into `tree` under `key`."""
    if (existing := tree.get(key)) is None:
        tree[key] = incoming
        return

    if existing.type in PLACEHOLDERS and is_concrete(incoming.type):
        existing.type = incoming.type
    existing.count += incoming.count
    existing.containers += incoming.containers
    existing.has_null = existing.has_null or incoming.has_null

    merge_trees(existing.children, incoming.children)
    if existing.children:
        existing.type = None


def merge_trees(into: FieldTree, other: FieldTree) -> None:
    for key, info in other.items():
        merge_field(into, key, info)


def collect(data: Json) -> tuple[FieldTree, int]:
    """Fold every container in `data` into a tree without resolving optionality.

    Returns the tree and the number of containers found: 1 for an object, the
    number of object elements for a list, 0 for anything else.
    """
    tree: FieldTree = {}
    containers = _objects_in(data)
    for obj in containers:
        for key, value in obj.items():
            fold_value(tree, key, value)
    return tree, len(containers)


def resolve_optionality(tree: FieldTree, parent_count: int) -> None:
    """Mark fields missing from some containers, or ever null, as optional."""
    for info in tree.values():
        info.optional = info.count < parent_count or info.has_null
        if info.children:
            resolve_optionality(info.children, info.containers)


def analyze_many(documents: Iterable[Json]) -> FieldTree:
    """Single schema for several documents, as if their containers were one list."""
    tree: FieldTree = {}
    total = 0
    for data in documents:
        fields, containers = collect(data)
        merge_trees(tree, fields)
        total += containers

    logger.debug("Analyzed %d containers", total)
    resolve_optionality(tree, total)
    return tree


def analyze(data: Json) -> FieldTree:
    return analyze_many([data])
