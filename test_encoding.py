# test_encoding.py - Field encoder tests

import base64
import json
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs

import pytest
from restlib import (
    ContentType, DefaultId, InvalidRecordError, Model, UnsupportedContentTypeError,
    UnsupportedFieldTypeError, encode_fields, url_encode_fields
)


@dataclass
class Todo(Model):
    Id: int = 0
    Title: str = ""
    IsCompleted: bool = False

    def model_id(self) -> str:
        return str(self.Id)

    def root_url(self) -> str:
        return "http://localhost:3000/todos"


@dataclass
class Scalars(DefaultId, Model):
    Count: int = 0
    Size: int = 0
    Flag: bool = False
    Name: str = ""
    Raw: bytes = b""
    Note: Optional[str] = None

    def root_url(self) -> str:
        return "/scalars"


@dataclass
class Measurement(DefaultId, Model):
    Value: float = 0.0

    def root_url(self) -> str:
        return "/measurements"


@dataclass
class Owner(DefaultId, Model):
    Pet: Optional[Todo] = None

    def root_url(self) -> str:
        return "/owners"


class Bookmark(Model):
    """Model that is not a dataclass and lists its own fields"""
    def __init__(self, url: str, starred: Optional[bool] = None):
        self.url = url
        self.starred = starred

    def model_id(self) -> str:
        return self.url

    def root_url(self) -> str:
        return "/bookmarks"

    def fields(self):
        return [("Url", self.url), ("Starred", self.starred)]


class Opaque(Model):
    def model_id(self) -> str:
        return ""

    def root_url(self) -> str:
        return "/opaque"


def test_url_encode_title():
    """Strings are query escaped, spaces become +"""
    todo = Todo(Title="Discover the meaning of life")
    assert url_encode_fields(todo) == "Id=0&Title=Discover+the+meaning+of+life&IsCompleted=false"

def test_url_encode_scalars_in_declaration_order():
    """Every supported scalar is rendered in declaration order"""
    model = Scalars(Id="a b", Count=-12, Size=7, Flag=True, Name="x&y=z", Raw=b"bytes/here")
    assert url_encode_fields(model) == (
        "Id=a+b&Count=-12&Size=7&Flag=true&Name=x%26y%3Dz&Raw=bytes%2Fhere"
    )

def test_url_encode_round_trips_through_form_parsing():
    """What a form parser reads back equals the field values"""
    model = Scalars(Id="42", Count=3, Flag=False, Name="ünïcode & spaces ~._-", Raw=bytearray(b"a+b"))
    parsed = parse_qs(url_encode_fields(model), keep_blank_values=True)
    assert parsed == {
        "Id": ["42"],
        "Count": ["3"],
        "Size": ["0"],
        "Flag": ["false"],
        "Name": ["ünïcode & spaces ~._-"],
        "Raw": ["a+b"],
    }

def test_none_fields_are_omitted():
    """A None field is left out entirely, not sent as Note="""
    encoded = url_encode_fields(Scalars(Id="1"))
    assert "Note" not in encoded
    assert encoded.endswith("&Raw=")

    encoded = url_encode_fields(Scalars(Id="1", Note="hi"))
    assert encoded.endswith("&Note=hi")

def test_all_fields_none_encodes_to_empty_string():
    assert url_encode_fields(Bookmark(url=None)) == ""

def test_custom_fields():
    """Models can list their own fields instead of being dataclasses"""
    assert url_encode_fields(Bookmark("http://example.com/?q=1", starred=True)) == (
        "Url=http%3A%2F%2Fexample.com%2F%3Fq%3D1&Starred=true"
    )

def test_none_model_is_invalid():
    with pytest.raises(InvalidRecordError):
        url_encode_fields(None)

def test_non_model_is_invalid():
    with pytest.raises(InvalidRecordError):
        url_encode_fields({"Title": "dict is not a model"})

def test_model_without_fields_is_invalid():
    with pytest.raises(InvalidRecordError):
        url_encode_fields(Opaque())

def test_float_field_is_unsupported():
    with pytest.raises(UnsupportedFieldTypeError) as exc_info:
        url_encode_fields(Measurement(Id="1", Value=1.5))

    assert exc_info.value.field_name == "Value"
    assert exc_info.value.field_type == "float"
    assert "Value" in str(exc_info.value)

def test_nested_model_is_unsupported():
    with pytest.raises(UnsupportedFieldTypeError) as exc_info:
        url_encode_fields(Owner(Id="1", Pet=Todo()))

    assert exc_info.value.field_name == "Pet"
    assert exc_info.value.field_type == "Todo"

def test_nested_model_set_to_none_is_omitted():
    assert url_encode_fields(Owner(Id="1")) == "Id=1"

def test_encode_fields_json():
    """JSON bodies carry every field, None included"""
    encoded = encode_fields(Scalars(Id="1", Name="n", Raw=b"\x00\x01"), ContentType.JSON)
    assert json.loads(encoded) == {
        "Id": "1",
        "Count": 0,
        "Size": 0,
        "Flag": False,
        "Name": "n",
        "Raw": base64.b64encode(b"\x00\x01").decode("ascii"),
        "Note": None,
    }

def test_encode_fields_json_propagates_marshal_errors():
    class Unserializable:
        pass

    with pytest.raises(TypeError):
        encode_fields(Owner(Id="1", Pet=Unserializable()), ContentType.JSON)

def test_encode_fields_url_encoded():
    assert encode_fields(Todo(Id=1, Title="a"), ContentType.URL_ENCODED) == "Id=1&Title=a&IsCompleted=false"

def test_encode_fields_accepts_plain_header_strings():
    assert encode_fields(Todo(Id=1), "application/json") == '{"Id": 1, "Title": "", "IsCompleted": false}'

def test_encode_fields_unknown_content_type():
    with pytest.raises(UnsupportedContentTypeError):
        encode_fields(Todo(), "text/plain")
