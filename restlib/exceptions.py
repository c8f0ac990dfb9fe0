# restlib/exceptions.py

class RestLibError(Exception):
    """Base exception for restlib operations"""
    pass

class InvalidRecordError(RestLibError):
    """Raised when a model is None or cannot be represented as flat fields"""
    pass

class UnsupportedFieldTypeError(RestLibError):
    """Raised when a field value has no url-encoded representation"""
    def __init__(self, field_name: str, field_type: str):
        self.field_name = field_name
        self.field_type = field_type
        super().__init__(
            f"Error encoding model as url-encoded data: don't know how to convert "
            f"field {field_name} of type {field_type} to a string"
        )

class UnsupportedContentTypeError(RestLibError):
    """Raised when the client is configured with an unknown content type"""
    def __init__(self, content_type):
        self.content_type = content_type
        super().__init__(f"restlib: don't know how to handle content type: {content_type}")

class InvalidCollectionError(RestLibError):
    """Raised when read_all gets something other than a list of models"""
    pass

class RequestBuildError(RestLibError):
    """Raised when a request cannot be built from the method and url"""
    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        super().__init__(f"Something went wrong building {method} request to {url}: {reason}")

class TransportError(RestLibError):
    """Raised when the request never got a response"""
    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        super().__init__(f"Something went wrong with {method} request to {url}: {reason}")

class HTTPError(RestLibError):
    """
    Raised whenever the server answers with a non-2xx status code.
    Carries the url the request was sent to, the status code and the
    raw response body.
    """
    def __init__(self, url: str, status_code: int, body: bytes):
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"restlib: http request to {url} returned status code {status_code}")

class ResponseReadError(RestLibError):
    """Raised when the response body could not be read"""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Couldn't read response to {url}: {reason}")

class DecodeError(RestLibError):
    """Raised when the response body is not the JSON that was expected"""
    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Couldn't decode response to {url}: {reason}")
