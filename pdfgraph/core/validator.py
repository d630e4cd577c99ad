"""Validation helpers: input paths and object-graph integrity."""

from __future__ import annotations

from pathlib import Path

from .document import Document
from .exceptions import LoadError, StructuralError
from .graph import iter_references
from .objects import Dictionary, ObjectId, Reference
from .utils import resolve_path


def ensure_pdf_exists(path: str | Path) -> Path:
    resolved = resolve_path(path)
    if not resolved.exists():
        raise LoadError(f"PDF file not found: {resolved}")
    if not resolved.is_file():
        raise LoadError(f"Expected a PDF file, got a directory: {resolved}")
    return resolved


def ensure_output_parent(path: str | Path) -> Path:
    resolved = resolve_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def _count_leaves(document: Document, node_id: ObjectId, issues: list[str], active: set[ObjectId]) -> int:
    if node_id in active:
        issues.append(f"Page tree cycle through {node_id}")
        return 0
    node = document.objects.get(node_id)
    if not isinstance(node, Dictionary):
        return 0
    if node.has_type("Page"):
        return 1
    kids = node.get("Kids")
    if not isinstance(kids, list):
        return 0
    active.add(node_id)
    total = 0
    for kid in kids:
        if not isinstance(kid, Reference):
            continue
        child = document.objects.get(kid.target)
        if isinstance(child, Dictionary) and child.has_type("Page"):
            parent = child.get("Parent")
            if not (isinstance(parent, Reference) and parent.target == node_id):
                issues.append(f"Page {kid.target} does not point back to its parent {node_id}")
        total += _count_leaves(document, kid.target, issues, active)
    active.discard(node_id)
    count = node.get("Count")
    if count != total:
        issues.append(f"Pages node {node_id} has Count {count!r} but {total} page leaves")
    return total


def find_integrity_issues(document: Document) -> list[str]:
    """Return a description of every broken graph invariant in *document*."""

    issues: list[str] = []
    for object_id, obj in document.iter_objects():
        for target in iter_references(obj):
            if target not in document.objects:
                issues.append(f"Object {object_id} references missing object {target}")
    for target in iter_references(document.trailer):
        if target not in document.objects:
            issues.append(f"Trailer references missing object {target}")

    try:
        catalog = document.catalog()
    except StructuralError as exc:
        issues.append(str(exc))
        return issues
    if not catalog.has_type("Catalog"):
        issues.append("Trailer Root is not a Catalog")
    try:
        root_id = document.pages_root_id()
    except StructuralError as exc:
        issues.append(str(exc))
        return issues
    _count_leaves(document, root_id, issues, set())
    return issues


def check_integrity(document: Document) -> None:
    """Raise :class:`StructuralError` when *document* breaks a graph invariant."""

    issues = find_integrity_issues(document)
    if issues:
        raise StructuralError("; ".join(issues))


__all__ = ["ensure_pdf_exists", "ensure_output_parent", "find_integrity_issues", "check_integrity"]
