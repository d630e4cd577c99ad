"""Merge functionality for the :mod:`pdfgraph.merge` package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..core.document import INHERITABLE_PAGE_ATTRIBUTES, Document
from ..core.exceptions import InvalidArgumentError, StructuralError
from ..core.graph import nullify_dangling, prune_unreachable, renumber
from ..core.objects import Dictionary, Name, ObjectId, Reference, as_dict, type_name
from ..core.outline import Bookmark, build_outline, outline_item_ids
from ..core.parser import load
from ..core.validator import check_integrity, ensure_output_parent, ensure_pdf_exists
from ..core.writer import save

LOGGER = logging.getLogger("pdfgraph.merge")

MINIMUM_VERSION = "1.5"
_OUTLINE_TYPES = ("Outlines", "Outline")


def _version_key(version: str) -> tuple[int, ...]:
    try:
        return tuple(int(part) for part in version.split("."))
    except ValueError:
        return (0,)


def _outline_ids(document: Document) -> set[ObjectId]:
    outlines = document.catalog().get("Outlines")
    if isinstance(outlines, Reference):
        return outline_item_ids(document, outlines.target)
    return set()


def build_merged_document(documents: Sequence[Document]) -> Document:
    """Compose *documents* into a single document.

    The inputs are renumbered in place into disjoint identifier ranges, their
    page leaves are collected in page order under one flat ``Pages`` node and
    one ``Page_<n>`` bookmark is added per input, ``<n>`` being the output
    page at which that input starts.

    Raises:
        InvalidArgumentError: If *documents* is empty.
        StructuralError: If an input has no Catalog or page tree, or the
            inputs hold no pages at all.
    """

    if not documents:
        raise InvalidArgumentError("No input documents provided")

    merged = Document()
    page_order: list[ObjectId] = []
    bookmarks: list[Bookmark] = []
    catalog_id: ObjectId | None = None
    catalog = Dictionary()
    pages_id: ObjectId | None = None
    pages_node = Dictionary()
    info: Reference | None = None
    version = MINIMUM_VERSION

    next_id = 1
    for index, document in enumerate(documents, start=1):
        document.materialize_inherited_attributes()
        next_id = renumber(document, next_id)

        doc_pages = list(document.get_pages().values())
        if doc_pages:
            bookmarks.append(Bookmark(f"Page_{len(page_order) + 1}", doc_pages[0]))
        else:
            LOGGER.warning("Input document %d has no pages", index)
        page_order.extend(doc_pages)

        doc_catalog_id = document.catalog_id
        tree_nodes = set(document.page_tree_nodes())
        if pages_id is None:
            pages_id = document.pages_root_id()
        excluded = _outline_ids(document)

        for object_id, obj in document.iter_objects():
            kind = type_name(obj)
            if object_id in excluded or kind in _OUTLINE_TYPES:
                continue
            if object_id == doc_catalog_id or kind == "Catalog":
                if catalog_id is None:
                    catalog_id = object_id
                    catalog = as_dict(obj).copy()
                continue
            if object_id in tree_nodes or kind == "Pages":
                if isinstance(obj, Dictionary):
                    pages_node.update(obj)
                continue
            merged.objects[object_id] = obj

        if info is None and isinstance(document.trailer.get("Info"), Reference):
            info = document.trailer["Info"]
        if _version_key(document.version) > _version_key(version):
            version = document.version
        LOGGER.debug("Collected %d page(s) from input document %d", len(doc_pages), index)

    if catalog_id is None or pages_id is None:
        raise StructuralError("Merged document has no Catalog or Pages root")
    if not page_order:
        raise StructuralError("Input documents contain no pages")

    for page_id in page_order:
        page = merged.objects[page_id]
        page["Type"] = Name("Page")
        page["Parent"] = Reference(pages_id)

    # every page already carries its own copy of these
    for key in ("Parent", *INHERITABLE_PAGE_ATTRIBUTES):
        pages_node.remove(key)
    pages_node["Type"] = Name("Pages")
    pages_node["Kids"] = [Reference(page_id) for page_id in page_order]
    pages_node["Count"] = len(page_order)
    merged.objects[pages_id] = pages_node

    catalog["Type"] = Name("Catalog")
    catalog["Pages"] = Reference(pages_id)
    catalog.remove("Outlines")
    merged.objects[catalog_id] = catalog

    merged.trailer = Dictionary(Root=Reference(catalog_id))
    if info is not None:
        merged.trailer["Info"] = info
    merged.max_id = next_id - 1

    outlines_id = build_outline(merged, bookmarks)
    if outlines_id is not None:
        catalog["Outlines"] = Reference(outlines_id)

    nullify_dangling(merged)
    prune_unreachable(merged)
    renumber(merged, 1)
    merged.version = version
    check_integrity(merged)
    return merged


def merge_pdfs(inputs: Iterable[str | Path], output: str | Path) -> Path:
    """Merge *inputs* into *output* and return the resulting path.

    Every input is loaded before anything is written; a load failure aborts
    the whole merge.

    Raises:
        InvalidArgumentError: If no inputs are given.
        LoadError: If an input cannot be read.
        StructuralError: If the inputs cannot be combined.
        SaveError: If *output* cannot be written.
    """

    pdf_paths = [ensure_pdf_exists(path) for path in inputs]
    if not pdf_paths:
        raise InvalidArgumentError("No input PDFs provided")

    documents = []
    for pdf_path in pdf_paths:
        LOGGER.debug("Loading input PDF %s", pdf_path)
        documents.append(load(pdf_path))

    merged = build_merged_document(documents)
    output_path = ensure_output_parent(output)
    save(merged, output_path, compress=True)
    LOGGER.info("Merged %d PDFs into %s", len(pdf_paths), output_path)
    return output_path


__all__ = ["build_merged_document", "merge_pdfs"]
