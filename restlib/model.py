# restlib/model.py
import base64
import dataclasses
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidRecordError

# annotations that mark a field as holding bytes, including string annotations
_BYTEARRAY_ANNOTATIONS = (bytearray, Optional[bytearray], "bytearray", "Optional[bytearray]")
_BYTES_ANNOTATIONS = (bytes, Optional[bytes], "bytes", "Optional[bytes]")


class Model(ABC):
    """
    Base class for everything the client can create, read, update and delete.

    A model answers two questions for the client: which id it has (model_id)
    and where its REST resource lives (root_url). root_url can be relative,
    e.g. "/todos", when the client is configured with a base_url, or absolute,
    e.g. "http://example.com/todos". It should not end with a slash.

    Fields are read with fields() and written back with assign(). Dataclass
    models get both for free. Any other model overrides both: fields()
    returns its (name, value) pairs in declaration order and assign() sets
    them from a decoded JSON object. Values must be flat: int, bool, str,
    bytes or None.
    """

    @abstractmethod
    def model_id(self) -> str:
        """Unique identifier used to build the url of a single model"""

    @abstractmethod
    def root_url(self) -> str:
        """Url of the REST resource for this kind of model"""

    def fields(self) -> List[Tuple[str, Any]]:
        if not dataclasses.is_dataclass(self):
            raise InvalidRecordError(
                f"{type(self).__name__} must be a dataclass or override fields()"
            )
        return [(f.name, getattr(self, f.name)) for f in dataclasses.fields(self)]

    def assign(self, data: Dict[str, Any]):
        """
        Set fields from a decoded JSON object. Keys are matched to field names
        exactly first, then case-insensitively. Unknown keys are ignored and
        fields missing from data keep their current value. Bytes fields take
        the base64 strings that JSON bodies carry them as.

        Raises ValueError when a bytes field gets a string that is not base64.
        """
        if not dataclasses.is_dataclass(self):
            raise InvalidRecordError(
                f"{type(self).__name__} must be a dataclass or override assign()"
            )
        annotations = {f.name: f.type for f in dataclasses.fields(self)}
        names = [name for name, _ in self.fields()]
        by_lower = {}
        for name in names:
            by_lower.setdefault(name.lower(), name)

        for key, value in data.items():
            name = key if key in names else by_lower.get(key.lower())
            if name is None:
                continue
            if isinstance(value, str):
                value = _decode_bytes(value, annotations.get(name), getattr(self, name, None))
            setattr(self, name, value)


def _decode_bytes(value: str, annotation, current):
    if isinstance(current, bytearray) or annotation in _BYTEARRAY_ANNOTATIONS:
        return bytearray(base64.b64decode(value, validate=True))
    if isinstance(current, bytes) or annotation in _BYTES_ANNOTATIONS:
        return base64.b64decode(value, validate=True)
    return value


@dataclasses.dataclass
class DefaultId:
    """
    Mixin with an Id field and the matching model_id. Put it first in the
    bases of a dataclass model:

        @dataclass
        class Todo(DefaultId, Model):
            Title: str = ""
    """
    Id: str = ""

    def model_id(self) -> str:
        return self.Id
