from __future__ import annotations

import io
import zlib
from pathlib import Path
from typing import Callable
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfgraph.core.document import Document  # noqa: E402
from pdfgraph.core.objects import Dictionary, Name, Reference, Stream  # noqa: E402
from pdfgraph.core.writer import save  # noqa: E402


def _write_blank_pdf(path: Path, page_sizes: list[tuple[int, int]], metadata: dict | None = None) -> Path:
    writer = PdfWriter()
    for width, height in page_sizes:
        writer.add_blank_page(width=width, height=height)
    if metadata:
        writer.add_metadata(metadata)
    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    return _write_blank_pdf(
        tmp_path / "sample.pdf",
        [(200, 200)] * 5,
        {"/Producer": "pdfgraph-tests", "/Title": "Sample"},
    )


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(filename: str, title: str | None = None, pages: int = 1, width: int = 72) -> Path:
        metadata = {"/Title": title} if title is not None else None
        return _write_blank_pdf(tmp_path / filename, [(width + index, 72) for index in range(pages)], metadata)

    return _create


@pytest.fixture()
def sample_pdfs(pdf_factory: Callable[..., Path]) -> list[Path]:
    pdf1 = pdf_factory("one.pdf", title="Document One")
    pdf2 = pdf_factory("two.pdf")
    return [pdf1, pdf2]


def build_document(
    page_count: int = 2,
    *,
    inherit_media_box: bool = False,
    root_rotate: object = None,
) -> Document:
    """Catalog, one Pages node and *page_count* pages sharing a Helvetica font.

    Page ``n`` has its own content stream drawing ``Page n`` and, unless
    *inherit_media_box* is set, a MediaBox ``200 + n`` points wide.
    """

    document = Document(version="1.4")
    catalog_id = document.new_object_id()
    pages_id = document.new_object_id()
    font_id = document.add_object(
        Dictionary(Type=Name("Font"), Subtype=Name("Type1"), BaseFont=Name("Helvetica"))
    )
    kids = []
    for number in range(1, page_count + 1):
        content = Stream(Dictionary(), f"BT /F1 24 Tf 20 100 Td (Page {number}) Tj ET".encode("ascii"))
        content_id = document.add_object(content)
        page = Dictionary(
            Type=Name("Page"),
            Parent=Reference(pages_id),
            Contents=Reference(content_id),
            Resources=Dictionary(Font=Dictionary(F1=Reference(font_id))),
        )
        if not inherit_media_box:
            page["MediaBox"] = [0, 0, 200 + number, 200]
        kids.append(Reference(document.add_object(page)))

    pages = Dictionary(Type=Name("Pages"), Kids=kids, Count=page_count)
    if inherit_media_box:
        pages["MediaBox"] = [0, 0, 300, 300]
    if root_rotate is not None:
        pages["Rotate"] = root_rotate
    document.set_object(pages_id, pages)
    document.set_object(catalog_id, Dictionary(Type=Name("Catalog"), Pages=Reference(pages_id)))
    document.trailer = Dictionary(Root=Reference(catalog_id))
    return document


@pytest.fixture()
def document_factory() -> Callable[..., Document]:
    return build_document


@pytest.fixture()
def graph_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Write a :func:`build_document` document to disk."""

    def _create(filename: str = "graph.pdf", **options) -> Path:
        path = tmp_path / filename
        save(build_document(**options), path)
        return path

    return _create


def jpeg_bytes(width: int = 40, height: int = 20, color: tuple[int, int, int] = (200, 30, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG", quality=95)
    return buffer.getvalue()


@pytest.fixture()
def jpeg_factory() -> Callable[..., bytes]:
    return jpeg_bytes


@pytest.fixture()
def image_pdf(tmp_path: Path) -> Path:
    """One page showing a 40x20 JPEG and a raw Flate image Pillow cannot open."""

    document = build_document(1)
    page_id = document.get_pages()[1]
    jpeg_id = document.add_object(
        Stream(
            Dictionary(
                Type=Name("XObject"),
                Subtype=Name("Image"),
                Width=40,
                Height=20,
                ColorSpace=Name("DeviceRGB"),
                BitsPerComponent=8,
                Filter=Name("DCTDecode"),
            ),
            jpeg_bytes(),
        )
    )
    raw_id = document.add_object(
        Stream(
            Dictionary(
                Type=Name("XObject"),
                Subtype=Name("Image"),
                Width=4,
                Height=4,
                ColorSpace=Name("DeviceGray"),
                BitsPerComponent=8,
                Filter=Name("FlateDecode"),
            ),
            zlib.compress(bytes(16)),
        )
    )
    page = document.get_dictionary(page_id)
    page["Resources"]["XObject"] = Dictionary(Im1=Reference(jpeg_id), Im2=Reference(raw_id))
    path = tmp_path / "images.pdf"
    save(document, path)
    return path
