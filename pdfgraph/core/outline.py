"""Bookmark model and outline tree construction."""

from __future__ import annotations

from dataclasses import dataclass, field

from .document import Document
from .exceptions import StructuralError
from .objects import Dictionary, Name, ObjectId, Reference, String

BLUE = (0.0, 0.0, 1.0)


@dataclass
class Bookmark:
    """A navigation entry pointing at a page.

    Attributes:
        title: Text shown by viewers.
        page: Identifier of the target page leaf.
        color: RGB components in ``0..1``.
        level: Indentation; a bookmark becomes a child of the closest
            preceding bookmark with a smaller level.
        flags: Outline item flags (``1`` italic, ``2`` bold).
    """

    title: str
    page: ObjectId
    color: tuple[float, float, float] = BLUE
    level: int = 0
    flags: int = 0
    children: list["Bookmark"] = field(default_factory=list, repr=False)


def _nest(bookmarks: list[Bookmark]) -> list[Bookmark]:
    roots: list[Bookmark] = []
    chain: list[Bookmark] = []
    for bookmark in bookmarks:
        bookmark.children = []
        while chain and chain[-1].level >= bookmark.level:
            chain.pop()
        if chain:
            chain[-1].children.append(bookmark)
        else:
            roots.append(bookmark)
        chain.append(bookmark)
    return roots


def _add_items(document: Document, parent_id: ObjectId, items: list[Bookmark]) -> tuple[ObjectId, ObjectId, int]:
    ids = [document.new_object_id() for _ in items]
    total = 0
    for index, (item_id, bookmark) in enumerate(zip(ids, items)):
        node = Dictionary(
            Title=String.from_text(bookmark.title),
            Parent=Reference(parent_id),
            Dest=[Reference(bookmark.page), Name("Fit")],
            C=[float(component) for component in bookmark.color],
            F=bookmark.flags,
        )
        if index > 0:
            node["Prev"] = Reference(ids[index - 1])
        if index + 1 < len(ids):
            node["Next"] = Reference(ids[index + 1])
        document.set_object(item_id, node)
        total += 1
        if bookmark.children:
            first, last, count = _add_items(document, item_id, bookmark.children)
            node["First"] = Reference(first)
            node["Last"] = Reference(last)
            node["Count"] = count
            total += count
    return ids[0], ids[-1], total


def build_outline(document: Document, bookmarks: list[Bookmark]) -> ObjectId | None:
    """Add an outline tree for *bookmarks* and return the Outlines root id.

    Nothing is added when *bookmarks* is empty.
    """

    if not bookmarks:
        return None
    root_id = document.new_object_id()
    first, last, count = _add_items(document, root_id, _nest(list(bookmarks)))
    document.set_object(
        root_id,
        Dictionary(Type=Name("Outlines"), First=Reference(first), Last=Reference(last), Count=count),
    )
    return root_id


def outline_item_ids(document: Document, outlines_id: ObjectId) -> set[ObjectId]:
    """Return the Outlines root and every item reachable through First/Next."""

    found: set[ObjectId] = set()
    stack = [outlines_id]
    while stack:
        current = stack.pop()
        if current in found:
            continue
        node = document.objects.get(current)
        if not isinstance(node, Dictionary):
            continue
        found.add(current)
        for key in ("First", "Next"):
            ref = node.get(key)
            if isinstance(ref, Reference):
                stack.append(ref.target)
    return found


def read_titles(document: Document) -> list[str]:
    """Return top-level outline titles in order."""

    try:
        outlines = document.catalog().get("Outlines")
    except StructuralError:
        return []
    root = document.objects.get(outlines.target) if isinstance(outlines, Reference) else None
    titles: list[str] = []
    if not isinstance(root, Dictionary):
        return titles
    current = root.get("First")
    seen: set[ObjectId] = set()
    while isinstance(current, Reference) and current.target not in seen:
        seen.add(current.target)
        item = document.objects.get(current.target)
        if not isinstance(item, Dictionary):
            break
        title = item.get("Title")
        if isinstance(title, String):
            titles.append(title.to_text())
        current = item.get("Next")
    return titles


__all__ = ["Bookmark", "build_outline", "outline_item_ids", "read_titles"]
