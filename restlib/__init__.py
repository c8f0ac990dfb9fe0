# restlib/__init__.py
from .client import Client
from .encoding import ContentType, encode_fields, url_encode_fields
from .model import Model, DefaultId
from .exceptions import (
    RestLibError, InvalidRecordError, UnsupportedFieldTypeError, UnsupportedContentTypeError,
    InvalidCollectionError, RequestBuildError, TransportError, HTTPError, ResponseReadError, DecodeError
)

__version__ = "0.1.0"
__all__ = [
    "Client", "ContentType", "encode_fields", "url_encode_fields", "Model", "DefaultId",
    "RestLibError", "InvalidRecordError", "UnsupportedFieldTypeError", "UnsupportedContentTypeError",
    "InvalidCollectionError", "RequestBuildError", "TransportError", "HTTPError",
    "ResponseReadError", "DecodeError"
]
