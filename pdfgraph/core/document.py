"""In-memory PDF document: an arena of indirect objects keyed by identifier."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator

from .exceptions import MissingObjectError, StructuralError, TypeMismatchError
from .objects import Dictionary, ObjectId, Reference, Stream, as_dict, type_name

LOGGER = logging.getLogger("pdfgraph.document")

INHERITABLE_PAGE_ATTRIBUTES = ("Resources", "MediaBox", "CropBox", "Rotate")


@dataclass
class Document:
    """Owns every object of a PDF file.

    Attributes:
        objects: Mapping of :class:`ObjectId` to PDF object.
        trailer: Trailer dictionary; ``Root`` references the Catalog.
        version: Header version string such as ``"1.7"``.
        max_id: Highest object number allocated so far.
    """

    objects: dict[ObjectId, Any] = field(default_factory=dict)
    trailer: Dictionary = field(default_factory=Dictionary)
    version: str = "1.7"
    max_id: int = 0

    def __post_init__(self) -> None:
        if self.objects:
            self.max_id = max(self.max_id, max(oid.number for oid in self.objects))

    def __contains__(self, object_id: ObjectId) -> bool:
        return object_id in self.objects

    def __len__(self) -> int:
        return len(self.objects)

    def iter_objects(self) -> Iterator[tuple[ObjectId, Any]]:
        """Yield ``(id, object)`` pairs in identifier order."""

        for object_id in sorted(self.objects):
            yield object_id, self.objects[object_id]

    def new_object_id(self) -> ObjectId:
        self.max_id += 1
        return ObjectId(self.max_id, 0)

    def add_object(self, obj: Any) -> ObjectId:
        object_id = self.new_object_id()
        self.objects[object_id] = obj
        return object_id

    def set_object(self, object_id: ObjectId, obj: Any) -> None:
        self.objects[object_id] = obj
        if object_id.number > self.max_id:
            self.max_id = object_id.number

    def get_object(self, object_id: ObjectId) -> Any:
        try:
            return self.objects[object_id]
        except KeyError as exc:
            raise MissingObjectError(f"Object {object_id} does not exist") from exc

    def resolve(self, value: Any) -> Any:
        """Follow reference chains until a direct object is reached."""

        seen: set[ObjectId] = set()
        while isinstance(value, Reference):
            if value.target in seen:
                raise MissingObjectError(f"Reference cycle at {value.target}")
            seen.add(value.target)
            value = self.get_object(value.target)
        return value

    def get_dictionary(self, object_id: ObjectId) -> Dictionary:
        """Return the dictionary of object *object_id*.

        Streams are rejected; callers that accept either use
        :meth:`get_object` and inspect the result.
        """

        return as_dict(self.get_object(object_id))

    # Catalog and page tree -------------------------------------------------

    @property
    def catalog_id(self) -> ObjectId:
        root = self.trailer.get("Root")
        if not isinstance(root, Reference):
            raise StructuralError("Trailer has no Root reference")
        return root.target

    def catalog(self) -> Dictionary:
        try:
            catalog = self.get_dictionary(self.catalog_id)
        except (MissingObjectError, TypeMismatchError) as exc:
            raise StructuralError("Document has no readable Catalog") from exc
        return catalog

    def pages_root_id(self) -> ObjectId:
        pages = self.catalog().get("Pages")
        if not isinstance(pages, Reference) or pages.target not in self.objects:
            raise StructuralError("Catalog has no Pages root")
        return pages.target

    def get_pages(self) -> dict[int, ObjectId]:
        """Map 1-based page numbers to page leaf identifiers.

        The page tree is walked depth first through ``Kids``; the returned
        dictionary iterates in page-number order.
        """

        pages: dict[int, ObjectId] = {}
        visited: set[ObjectId] = set()
        stack = [self.pages_root_id()]
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                LOGGER.warning("Page tree node %s visited twice; ignoring", node_id)
                continue
            visited.add(node_id)
            node = self.objects.get(node_id)
            if not isinstance(node, Dictionary):
                LOGGER.warning("Page tree entry %s is missing or not a dictionary", node_id)
                continue
            kids = node.get("Kids")
            if node.has_type("Page") or (type_name(node) is None and not isinstance(kids, list)):
                pages[len(pages) + 1] = node_id
                continue
            if not isinstance(kids, list):
                continue
            for kid in reversed(kids):
                if isinstance(kid, Reference):
                    stack.append(kid.target)
        return pages

    def page_tree_nodes(self) -> list[ObjectId]:
        """Return every interior ``Pages`` node reachable from the Catalog."""

        nodes: list[ObjectId] = []
        visited: set[ObjectId] = set()
        stack = [self.pages_root_id()]
        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)
            node = self.objects.get(node_id)
            if not isinstance(node, Dictionary) or not isinstance(node.get("Kids"), list):
                continue
            if node.has_type("Page"):
                continue
            nodes.append(node_id)
            for kid in node["Kids"]:
                if isinstance(kid, Reference):
                    stack.append(kid.target)
        return sorted(nodes)

    def effective_attribute(self, page_id: ObjectId, key: str) -> Any:
        """Return *key* from the page or its nearest ancestor, else ``None``."""

        visited: set[ObjectId] = set()
        current: ObjectId | None = page_id
        while current is not None and current not in visited:
            visited.add(current)
            node = self.objects.get(current)
            if not isinstance(node, Dictionary):
                return None
            if key in node:
                return node[key]
            parent = node.get("Parent")
            current = parent.target if isinstance(parent, Reference) else None
        return None

    def materialize_inherited_attributes(self) -> int:
        """Copy inherited page attributes onto every page leaf.

        Returns the number of attributes written.
        """

        written = 0
        for page_id in self.get_pages().values():
            page = self.objects[page_id]
            for key in INHERITABLE_PAGE_ATTRIBUTES:
                if key in page:
                    continue
                value = self.effective_attribute(page_id, key)
                if value is not None:
                    page[key] = copy.deepcopy(value)
                    written += 1
        if written:
            LOGGER.debug("Materialized %d inherited page attribute(s)", written)
        return written

    def streams(self) -> Iterator[tuple[ObjectId, Stream]]:
        for object_id, obj in self.iter_objects():
            if isinstance(obj, Stream):
                yield object_id, obj


__all__ = ["Document", "INHERITABLE_PAGE_ATTRIBUTES"]
