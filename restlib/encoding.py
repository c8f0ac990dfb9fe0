# restlib/encoding.py
import base64
import json
from enum import Enum
from urllib.parse import quote_plus

from .exceptions import InvalidRecordError, UnsupportedContentTypeError, UnsupportedFieldTypeError
from .model import Model


class ContentType(str, Enum):
    """Body encodings the client can send, valued as their Content-Type header"""
    URL_ENCODED = "application/x-www-form-urlencoded"
    JSON = "application/json"


def encode_fields(model: Model, content_type: ContentType) -> str:
    """Encode the fields of model as url-encoded or JSON data, depending on content_type"""
    if content_type == ContentType.URL_ENCODED:
        return url_encode_fields(model)
    if content_type == ContentType.JSON:
        return json_encode_fields(model)
    raise UnsupportedContentTypeError(content_type)


def json_encode_fields(model: Model) -> str:
    # bytes have no JSON form of their own, send them base64 encoded
    def default(value):
        if isinstance(value, (bytes, bytearray)):
            return base64.b64encode(value).decode("ascii")
        raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

    return json.dumps(dict(_model_fields(model)), default=default)


def url_encode_fields(model: Model) -> str:
    """
    Return the fields of model as a url-encoded string, suitable for a body
    with Content-Type application/x-www-form-urlencoded.

    Fields whose value is None are left out entirely. Supported values are
    int, bool, str, bytes and bytearray. Field names are used as they are.
    """
    encoded_fields = []
    for name, value in _model_fields(model):
        if value is None:
            continue
        encoded_fields.append(f"{name}={url_encode_field(name, value)}")
    return "&".join(encoded_fields)


def url_encode_field(name: str, value) -> str:
    # bool before int, bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return quote_plus(value)
    if isinstance(value, (bytes, bytearray)):
        return quote_plus(bytes(value))
    raise UnsupportedFieldTypeError(name, type(value).__name__)


def _model_fields(model):
    if model is None:
        raise InvalidRecordError("Error encoding model: model was None")
    if not isinstance(model, Model):
        raise InvalidRecordError(
            f"Error encoding model: {type(model).__name__} does not implement Model"
        )
    return model.fields()
