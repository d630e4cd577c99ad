"""Split a document into standalone single-page documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from ..core.document import Document
from ..core.exceptions import MissingObjectError, PdfGraphError, SaveError
from ..core.graph import closure, transform_references
from ..core.objects import Dictionary, Name, ObjectId, Reference, as_dict
from ..core.parser import load
from ..core.validator import check_integrity, ensure_pdf_exists
from ..core.writer import save
from .utils import page_filename, resolve_output_directory

LOGGER = logging.getLogger("pdfgraph.split")


@dataclass
class SplitResult:
    """Outcome of a split run.

    Attributes:
        source: The input PDF.
        output_dir: Directory holding the page files.
        outputs: Written files in page order.
        failures: Page number to error message for pages that were skipped.
    """

    source: Path
    output_dir: Path
    outputs: list[Path] = field(default_factory=list)
    failures: dict[int, str] = field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return len(self.outputs)


def extract_page_document(source: Document, page_id: ObjectId, *, skip: Iterable[ObjectId] = ()) -> Document:
    """Build a one-page document from *page_id* and everything it references.

    Objects listed in *skip* (the source Catalog, ``Pages`` nodes and the
    other page leaves) are not copied; references to them, like references
    to objects absent from *source*, are written as null. The page's
    ``Parent`` is pointed at the new ``Pages`` node.
    """

    missing: set[ObjectId] = set()
    members = closure(source, [page_id], skip=skip, missing=missing)
    if page_id not in members:
        raise MissingObjectError(f"Page object {page_id} not found")

    output = Document(version=source.version)
    pages_id = output.new_object_id()
    mapping = {old_id: output.new_object_id() for old_id in sorted(members)}
    catalog_id = output.new_object_id()

    dropped = 0

    def _rewrite(ref: Reference) -> Any:
        nonlocal dropped
        new_id = mapping.get(ref.target)
        if new_id is None:
            dropped += 1
            return None
        return Reference(new_id)

    for old_id in sorted(members):
        output.set_object(mapping[old_id], transform_references(source.objects[old_id], _rewrite))

    page = as_dict(output.objects[mapping[page_id]])
    page["Parent"] = Reference(pages_id)
    output.set_object(
        pages_id,
        Dictionary(Type=Name("Pages"), Kids=[Reference(mapping[page_id])], Count=1),
    )
    output.set_object(catalog_id, Dictionary(Type=Name("Catalog"), Pages=Reference(pages_id)))
    output.trailer = Dictionary(Root=Reference(catalog_id))

    if missing:
        LOGGER.warning("Page %s references %d missing object(s); written as null", page_id, len(missing))
    LOGGER.debug("Page %s: copied %d object(s), nulled %d reference(s)", page_id, len(members), dropped)
    check_integrity(output)
    return output


def _structural_ids(document: Document, pages: dict[int, ObjectId]) -> set[ObjectId]:
    return set(document.page_tree_nodes()) | {document.catalog_id} | set(pages.values())


def split_document(document: Document) -> dict[int, Document]:
    """Return one standalone document per page of *document*, keyed by page number."""

    document.materialize_inherited_attributes()
    pages = document.get_pages()
    structural = _structural_ids(document, pages)
    return {
        number: extract_page_document(document, page_id, skip=structural - {page_id})
        for number, page_id in pages.items()
    }


def split_pdf(input: str | Path, output_dir: str | Path) -> SplitResult:
    """Write every page of *input* to ``<output_dir>/<stem>-pages/page-<n>.pdf``.

    A page that cannot be extracted is recorded in
    :attr:`SplitResult.failures` and the remaining pages are still written;
    a write failure aborts the split.

    Raises:
        LoadError: If *input* cannot be read.
        StructuralError: If *input* has no Catalog or page tree.
        SaveError: If a page file cannot be written.
    """

    source_path = ensure_pdf_exists(input)
    document = load(source_path)
    document.materialize_inherited_attributes()
    pages = document.get_pages()
    structural = _structural_ids(document, pages)

    directory = resolve_output_directory(source_path, output_dir)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SaveError(f"Unable to create output directory {directory}: {exc}") from exc

    result = SplitResult(source=source_path, output_dir=directory)
    for number, page_id in pages.items():
        try:
            page_document = extract_page_document(document, page_id, skip=structural - {page_id})
        except PdfGraphError as exc:
            LOGGER.error("Skipping page %d of %s: %s", number, source_path, exc)
            result.failures[number] = str(exc)
            continue
        destination = directory / page_filename(number)
        save(page_document, destination, compress=True)
        result.outputs.append(destination)

    LOGGER.info("Split %s into %d file(s) in %s", source_path, len(result.outputs), directory)
    return result


__all__ = ["SplitResult", "extract_page_document", "split_document", "split_pdf"]
