"""Reference-graph traversal and identifier renumbering."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator, Mapping

from .document import Document
from .objects import Dictionary, ObjectId, Reference, Stream

LOGGER = logging.getLogger("pdfgraph.graph")


def iter_references(obj: Any) -> Iterator[ObjectId]:
    """Yield the target of every reference nested inside *obj*."""

    stack = [obj]
    while stack:
        current = stack.pop()
        if isinstance(current, Reference):
            yield current.target
        elif isinstance(current, Stream):
            stack.extend(current.dictionary.values())
        elif isinstance(current, dict):
            stack.extend(current.values())
        elif isinstance(current, list):
            stack.extend(current)


def closure(
    document: Document,
    root_ids: Iterable[ObjectId],
    *,
    skip: Iterable[ObjectId] = (),
    missing: set[ObjectId] | None = None,
) -> set[ObjectId]:
    """Return every identifier reachable from *root_ids*, roots included.

    Identifiers in *skip* are neither included nor followed. Targets that do
    not exist in *document* are left out of the result and added to
    *missing* when a set is supplied.
    """

    skipped = set(skip)
    reachable: set[ObjectId] = set()
    pending = [oid for oid in root_ids if oid not in skipped]
    while pending:
        object_id = pending.pop()
        if object_id in reachable:
            continue
        if object_id not in document.objects:
            if missing is not None:
                missing.add(object_id)
            continue
        reachable.add(object_id)
        for target in iter_references(document.objects[object_id]):
            if target not in reachable and target not in skipped:
                pending.append(target)
    return reachable


def transform_references(obj: Any, func: Callable[[Reference], Any]) -> Any:
    """Return a copy of *obj* with every reference replaced by ``func(ref)``.

    Containers are rebuilt; stream payloads are shared with the original.
    """

    if isinstance(obj, Reference):
        return func(obj)
    if isinstance(obj, Stream):
        return Stream(
            dictionary=transform_references(obj.dictionary, func),
            data=obj.data,
            compressible=obj.compressible,
        )
    if isinstance(obj, dict):
        return Dictionary((key, transform_references(value, func)) for key, value in obj.items())
    if isinstance(obj, list):
        return [transform_references(item, func) for item in obj]
    return obj


def remap(obj: Any, mapping: Mapping[ObjectId, ObjectId]) -> Any:
    """Rewrite references through *mapping*; unmapped references are kept."""

    def _lookup(ref: Reference) -> Reference:
        new_id = mapping.get(ref.target)
        return ref if new_id is None else Reference(new_id)

    return transform_references(obj, _lookup)


def renumber(document: Document, starting_at: int = 1) -> int:
    """Assign contiguous identifiers to every object of *document*.

    Objects are numbered in ascending order of their current identifier,
    generations are reset to ``0`` and every reference, trailer entries
    included, is rewritten. Returns the next free object number.
    """

    mapping = {
        old_id: ObjectId(number, 0)
        for number, old_id in enumerate(sorted(document.objects), start=starting_at)
    }
    document.objects = {
        mapping[old_id]: remap(obj, mapping) for old_id, obj in document.objects.items()
    }
    document.trailer = remap(document.trailer, mapping)
    next_free = starting_at + len(mapping)
    document.max_id = next_free - 1
    LOGGER.debug("Renumbered %d object(s) starting at %d", len(mapping), starting_at)
    return next_free


def nullify_dangling(document: Document) -> int:
    """Replace references to absent objects with null; return the count."""

    replaced = 0

    def _check(ref: Reference) -> Any:
        nonlocal replaced
        if ref.target in document.objects:
            return ref
        replaced += 1
        LOGGER.warning("Dropping reference to missing object %s", ref.target)
        return None

    document.objects = {
        object_id: transform_references(obj, _check) for object_id, obj in document.objects.items()
    }
    document.trailer = transform_references(document.trailer, _check)
    return replaced


def prune_unreachable(document: Document) -> int:
    """Drop objects that cannot be reached from the trailer."""

    reachable = closure(document, iter_references(document.trailer))
    unreachable = [object_id for object_id in document.objects if object_id not in reachable]
    for object_id in unreachable:
        del document.objects[object_id]
    if unreachable:
        LOGGER.debug("Pruned %d unreachable object(s)", len(unreachable))
    return len(unreachable)


__all__ = [
    "iter_references",
    "closure",
    "transform_references",
    "remap",
    "renumber",
    "nullify_dangling",
    "prune_unreachable",
]
