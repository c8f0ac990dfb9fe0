# restlib/client.py
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple
from urllib.parse import urlparse

import requests

from .encoding import ContentType, encode_fields
from .exceptions import (
    DecodeError,
    HTTPError,
    InvalidCollectionError,
    InvalidRecordError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)
from .model import Model

logger = logging.getLogger(__name__)

METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


class Client:
    """
    Sends RESTful requests for models and writes the JSON responses back
    into them.

    Urls and methods per operation:
      create    POST    model.root_url()
      read      GET     model.root_url() + "/" + resource_id
      read_all  GET     model_class().root_url()
      update    PATCH   model.root_url() + "/" + model.model_id()
      delete    DELETE  model.root_url() + "/" + model.model_id()

    Configure it by passing a config dict or by changing client.config:
      content_type  body encoding, ContentType.URL_ENCODED (default) or ContentType.JSON
      base_url      prefix for relative root urls such as "/todos"
      timeout       seconds, handed to the transport

    Every call sends exactly one request. Non-2xx responses raise HTTPError;
    nothing is retried.
    """

    def __init__(self, config: Dict = None, session: Optional[requests.Session] = None):
        self.config = {
            "content_type": ContentType.URL_ENCODED,
            "base_url": None,
            "timeout": 30,
            **(config or {})
        }
        self.session = session or requests.Session()

    @property
    def content_type(self) -> ContentType:
        return self.config["content_type"]

    @content_type.setter
    def content_type(self, value: ContentType):
        self.config["content_type"] = value

    def create(self, model: Model):
        """
        Encode the fields of model and POST them to model.root_url(). The
        server is expected to answer with the created object, which is
        written back into model.
        """
        content_type = self.content_type
        data = encode_fields(model, content_type)
        url, body = self._send_request("POST", model.root_url(), data, content_type)
        self._assign(model, url, body)

    def read(self, resource_id: str, model: Model):
        """GET model.root_url() + "/" + resource_id and write the response into model"""
        _check_model(model)
        url, body = self._send_request("GET", f"{model.root_url()}/{resource_id}")
        self._assign(model, url, body)

    def read_all(self, models: List[Model], model_class: Callable[[], Model]):
        """
        GET every model of one kind. model_class builds an empty model, which
        is only used to find the root url, so models may start out empty.
        The server answers with an array of objects; models is resized in
        place to hold exactly one model per object.
        """
        root_url = _root_url_from_models(models, model_class)
        url, body = self._send_request("GET", root_url)
        data = _decode(url, body)
        if not isinstance(data, list):
            raise DecodeError(url, f"expected a JSON array, got {type(data).__name__}")

        decoded = []
        for item in data:
            if not isinstance(item, dict):
                raise DecodeError(url, f"expected a JSON object, got {type(item).__name__}")
            new_model = model_class()
            _assign_data(new_model, url, item)
            decoded.append(new_model)
        models[:] = decoded

    def update(self, model: Model):
        """
        Encode the fields of model and PATCH them to the url of model. The
        updated object in the response is written back into model.
        """
        content_type = self.content_type
        data = encode_fields(model, content_type)
        url, body = self._send_request(
            "PATCH", f"{model.root_url()}/{model.model_id()}", data, content_type
        )
        self._assign(model, url, body)

    def delete(self, model: Model):
        """DELETE the url of model. The response body is ignored and model is left untouched."""
        _check_model(model)
        self._send_request("DELETE", f"{model.root_url()}/{model.model_id()}")

    def _assign(self, model: Model, url: str, body: bytes):
        data = _decode(url, body)
        if not isinstance(data, dict):
            raise DecodeError(url, f"expected a JSON object, got {type(data).__name__}")
        _assign_data(model, url, data)

    def _full_url(self, url: str) -> str:
        base_url = self.config["base_url"]
        if base_url and not urlparse(url).scheme:
            return base_url.rstrip("/") + "/" + url.lstrip("/")
        return url

    def _send_request(
        self,
        method: str,
        url: str,
        data: str = "",
        content_type: ContentType = None,
    ) -> Tuple[str, bytes]:
        """
        Send one request and return the url it went to together with the
        raw response body. Raises HTTPError for any non-2xx status.
        """
        url = self._full_url(url)
        if method not in METHODS:
            raise RequestBuildError(method, url, "unsupported method")

        headers = {"Accept": "application/json"}
        # Content-Type only goes along with a body
        if data:
            headers["Content-Type"] = ContentType(content_type).value

        try:
            prepared = requests.Request(
                method,
                url,
                headers=headers,
                data=data.encode("utf-8") if data else None,
            ).prepare()
        except (requests.RequestException, ValueError) as e:
            raise RequestBuildError(method, url, str(e)) from e

        logger.debug("Sending %s request to %s", method, prepared.url)
        try:
            response = self.session.send(prepared, timeout=self.config["timeout"], stream=True)
        except requests.RequestException as e:
            raise TransportError(method, prepared.url, str(e)) from e

        try:
            body = response.content
        except (requests.RequestException, OSError) as e:
            raise ResponseReadError(prepared.url, str(e)) from e
        finally:
            response.close()

        logger.debug("%s request to %s returned status code %d", method, prepared.url, response.status_code)
        if response.status_code // 100 != 2:
            raise HTTPError(prepared.url, response.status_code, body)
        return prepared.url, body


def _check_model(model):
    if model is None:
        raise InvalidRecordError("model was None")
    if not isinstance(model, Model):
        raise InvalidRecordError(f"{type(model).__name__} does not implement Model")


def _assign_data(model: Model, url: str, data: Dict[str, Any]):
    try:
        model.assign(data)
    except ValueError as e:
        raise DecodeError(url, str(e)) from e


def _decode(url: str, body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodeError(url, str(e)) from e


def _root_url_from_models(models, model_class) -> str:
    """Find the root url for a list of models without needing any element of it"""
    if not isinstance(models, list):
        raise InvalidCollectionError(
            f"models must be a list of models, {type(models).__name__} is not a list"
        )
    if not callable(model_class):
        raise InvalidCollectionError(f"{model_class!r} can't build a model")
    try:
        sample = model_class()
    except TypeError as e:
        raise InvalidCollectionError(f"{model_class!r} can't build an empty model: {e}") from e
    if not isinstance(sample, Model):
        raise InvalidCollectionError(
            f"models must be a list of models, {type(sample).__name__} does not implement Model"
        )
    return sample.root_url()
