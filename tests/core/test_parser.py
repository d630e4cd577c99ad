from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from pdfgraph.core.document import Document
from pdfgraph.core.exceptions import LoadError, SaveError
from pdfgraph.core.objects import Dictionary, Name, ObjectId, Reference, Stream, String
from pdfgraph.core.parser import load
from pdfgraph.core.validator import find_integrity_issues
from pdfgraph.core.writer import save, serialize, serialize_object


def test_load_pdf_written_by_pypdf(sample_pdf: Path) -> None:
    document = load(sample_pdf)

    assert len(document.get_pages()) == 5
    assert document.catalog().has_type("Catalog")
    assert isinstance(document.trailer["Info"], Reference)
    assert document.version.startswith("1.")
    assert not find_integrity_issues(document)


def test_load_accepts_bytes(sample_pdf: Path) -> None:
    document = load(sample_pdf.read_bytes())

    assert len(document.get_pages()) == 5


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LoadError):
        load(tmp_path / "missing.pdf")


def test_load_garbage(tmp_path: Path) -> None:
    path = tmp_path / "garbage.pdf"
    path.write_bytes(b"this is not a pdf")

    with pytest.raises(LoadError):
        load(path)


def test_plain_save_is_readable_by_pypdf(graph_pdf: Callable[..., Path]) -> None:
    path = graph_pdf(page_count=3)

    reader = PdfReader(str(path))

    assert path.read_bytes().startswith(b"%PDF-1.4")
    assert b"xref" in path.read_bytes()
    assert len(reader.pages) == 3
    assert float(reader.pages[1].mediabox.width) == 202


def test_compressed_save_flate_encodes_streams(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(4)
    path = tmp_path / "compressed.pdf"

    save(document, path, compress=True)

    reloaded = load(path)
    for object_id, _ in document.streams():
        assert reloaded.get_object(object_id).dictionary["Filter"] == Name("FlateDecode")
    reader = PdfReader(str(path))
    assert len(reader.pages) == 4
    assert "Page 3" in reader.pages[2].extract_text()


def test_compressed_save_leaves_filtered_and_metadata_streams_alone(
    tmp_path: Path, document_factory: Callable[..., Document]
) -> None:
    document = document_factory(1)
    raw = Stream(Dictionary(Filter=Name("ASCIIHexDecode")), b"414243>")
    metadata = Stream(Dictionary(Type=Name("Metadata"), Subtype=Name("XML")), b"<x/>", compressible=False)
    document.set_object(ObjectId(20), raw)
    document.set_object(ObjectId(21), metadata)
    document.catalog()["Extra"] = [Reference.to(20), Reference.to(21)]
    path = tmp_path / "filtered.pdf"

    save(document, path, compress=True)
    reloaded = load(path)

    assert reloaded.get_object(ObjectId(20)).dictionary["Filter"] == Name("ASCIIHexDecode")
    assert reloaded.get_object(ObjectId(20)).data == b"414243>"
    assert "Filter" not in reloaded.get_object(ObjectId(21)).dictionary
    assert reloaded.get_object(ObjectId(21)).data == b"<x/>"


def test_round_trip_preserves_values(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    catalog = document.catalog()
    catalog["Custom"] = Dictionary(
        Label=String(b"(nested) \\ text\n"),
        Binary=String(b"\x00\xff\x10"),
        Odd=Name("A B#C"),
        Ratio=0.25,
        Offset=-12,
        Flag=True,
        Nothing=None,
    )
    path = tmp_path / "values.pdf"

    save(document, path, compress=True)
    custom = load(path).catalog()["Custom"]

    assert custom["Label"] == String(b"(nested) \\ text\n")
    assert custom["Binary"] == String(b"\x00\xff\x10")
    assert custom["Odd"] == Name("A B#C")
    assert custom["Ratio"] == 0.25
    assert custom["Offset"] == -12
    assert custom["Flag"] is True
    assert custom["Nothing"] is None


def test_stream_payload_survives_round_trip(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    page_id = document.get_pages()[1]
    content_id = document.get_dictionary(page_id)["Contents"].target
    path = tmp_path / "plain.pdf"

    save(document, path)
    reloaded = load(path)

    assert reloaded.get_object(content_id).data == b"BT /F1 24 Tf 20 100 Td (Page 1) Tj ET"


def test_gaps_in_numbering_become_free_entries(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    document.set_object(ObjectId(9), Dictionary(Type=Name("Extra")))
    document.catalog()["Extra"] = Reference.to(9)
    path = tmp_path / "gaps.pdf"

    save(document, path)

    reader = PdfReader(str(path))
    assert len(reader.pages) == 1
    data = path.read_bytes()
    assert b"0000000006 65535 f" in data
    assert b"0000000007 00001 f" in data
    assert b"0000000000 00001 f" in data
    assert load(path).get_object(ObjectId(9))["Type"] == Name("Extra")


def test_serialize_object_syntax() -> None:
    assert serialize_object(Name("Type")) == b"/Type"
    assert serialize_object(Name("A B")) == b"/A#20B"
    assert serialize_object(Reference.to(4)) == b"4 0 R"
    assert serialize_object([1, 2.5, None, False]) == b"[ 1 2.5 null false ]"
    assert serialize_object(String(b"a(b)")) == b"<61286229>"
    assert serialize_object(Dictionary(A=1)) == b"<<\n/A 1\n>>"


def test_serialize_rejects_non_finite_numbers() -> None:
    with pytest.raises(SaveError):
        serialize_object([float("nan")])


def test_save_requires_root(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    document.trailer = Dictionary()

    with pytest.raises(SaveError):
        save(document, tmp_path / "rootless.pdf")
    assert not (tmp_path / "rootless.pdf").exists()


def test_save_keeps_trailer_info_and_id(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    info_id = document.add_object(Dictionary(Title=String(b"Graph")))
    document.trailer["Info"] = Reference(info_id)
    document.trailer["ID"] = [String(b"\x01" * 16), String(b"\x02" * 16)]
    path = tmp_path / "info.pdf"

    save(document, path)

    reader = PdfReader(str(path))
    assert reader.metadata.title == "Graph"
    reloaded = load(path)
    assert reloaded.trailer["Info"] == Reference(info_id)
    assert reloaded.trailer["ID"] == [String(b"\x01" * 16), String(b"\x02" * 16)]


def test_save_without_info_omits_producer(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    path = tmp_path / "bare.pdf"

    save(document_factory(1), path)

    assert b"/Producer" not in path.read_bytes()
    assert "Info" not in load(path).trailer


def test_serialize_rejects_direct_streams() -> None:
    with pytest.raises(SaveError):
        serialize_object(Dictionary(Inline=Stream(Dictionary(), b"")))


def test_serialize_does_not_mutate_streams(document_factory: Callable[..., Document]) -> None:
    document = document_factory(1)
    streams_before = {oid: (dict(s.dictionary), s.data) for oid, s in document.streams()}

    serialize(document, compress=True)

    assert {oid: (dict(s.dictionary), s.data) for oid, s in document.streams()} == streams_before


def test_save_to_unwritable_destination(tmp_path: Path, document_factory: Callable[..., Document]) -> None:
    with pytest.raises(SaveError):
        save(document_factory(1), tmp_path)
