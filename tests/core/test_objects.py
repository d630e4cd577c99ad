from __future__ import annotations

import pytest

from pdfgraph.core.exceptions import MissingKeyError, TypeMismatchError
from pdfgraph.core.objects import (
    Dictionary,
    Name,
    ObjectId,
    Reference,
    Stream,
    String,
    as_array,
    as_bool,
    as_dict,
    as_int,
    as_name,
    as_real,
    as_reference,
    as_stream,
    as_string,
    type_name,
)


def test_dictionary_missing_key_raises() -> None:
    dictionary = Dictionary(Type=Name("Page"))

    with pytest.raises(MissingKeyError) as excinfo:
        dictionary["Rotate"]

    assert excinfo.value.key == "Rotate"
    assert "/Rotate" in str(excinfo.value)
    assert dictionary.get("Rotate") is None


def test_missing_key_is_a_key_error() -> None:
    with pytest.raises(KeyError):
        Dictionary()["Kids"]


def test_dictionary_set_and_remove() -> None:
    dictionary = Dictionary()
    dictionary.set("Count", 1)
    dictionary.set("Count", 2)
    assert dictionary["Count"] == 2

    dictionary.remove("Count")
    dictionary.remove("Count")
    assert "Count" not in dictionary


def test_typed_getters() -> None:
    dictionary = Dictionary(
        Kids=[Reference.to(3)],
        Count=1,
        Type=Name("Pages"),
        Parent=Reference.to(1),
        Resources=Dictionary(),
    )

    assert dictionary.get_array("Kids") == [Reference.to(3)]
    assert dictionary.get_int("Count") == 1
    assert dictionary.get_name("Type") == "Pages"
    assert dictionary.get_reference("Parent") == ObjectId(1, 0)
    assert dictionary.get_dict("Resources") == {}
    with pytest.raises(TypeMismatchError):
        dictionary.get_int("Type")


def test_stream_is_not_read_as_dictionary() -> None:
    stream = Stream(Dictionary(Type=Name("XObject")), b"data")

    with pytest.raises(TypeMismatchError) as excinfo:
        as_dict(stream)

    assert "Dictionary" in str(excinfo.value)
    assert "Stream" in str(excinfo.value)
    assert as_stream(stream) is stream


def test_no_silent_coercion() -> None:
    with pytest.raises(TypeMismatchError):
        as_int(True)
    with pytest.raises(TypeMismatchError):
        as_int(1.0)
    with pytest.raises(TypeMismatchError):
        as_real(1)
    with pytest.raises(TypeMismatchError):
        as_bool(0)
    with pytest.raises(TypeMismatchError):
        as_name(String(b"Page"))
    with pytest.raises(TypeMismatchError):
        as_string(Name("Page"))
    with pytest.raises(TypeMismatchError):
        as_array(Dictionary())
    with pytest.raises(TypeMismatchError):
        as_reference(ObjectId(1, 0))


def test_type_mismatch_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        as_dict(None)


def test_accessors_return_values() -> None:
    assert as_int(7) == 7
    assert as_real(0.5) == 0.5
    assert as_bool(False) is False
    assert as_name(Name("Fit")) == "Fit"
    assert as_string(String(b"abc")) == b"abc"
    assert as_reference(Reference.to(4, 2)) == ObjectId(4, 2)


def test_type_name() -> None:
    assert type_name(Dictionary(Type=Name("Catalog"))) == "Catalog"
    assert type_name(Stream(Dictionary(Type=Name("XObject")))) == "XObject"
    assert type_name(Dictionary(Type=String(b"Catalog"))) is None
    assert type_name([Name("Catalog")]) is None


def test_string_text_encoding() -> None:
    latin = String.from_text("Page_1")
    assert latin.value == b"Page_1"
    assert latin.to_text() == "Page_1"

    unicode_text = String.from_text("Страница")
    assert unicode_text.value.startswith(b"\xfe\xff")
    assert unicode_text.to_text() == "Страница"


def test_object_ids_order_by_number_then_generation() -> None:
    ids = [ObjectId(3, 0), ObjectId(1, 1), ObjectId(1, 0), ObjectId(2)]

    assert sorted(ids) == [ObjectId(1, 0), ObjectId(1, 1), ObjectId(2, 0), ObjectId(3, 0)]
    assert str(ObjectId(5, 0)) == "5 0 R"
