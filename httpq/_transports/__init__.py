from .base import *
from .default import *
from .mock import *

__all__ = [
    "BaseConnection",
    "BaseTransport",
    "HTTPConnection",
    "HTTPTransport",
    "MockConnection",
    "MockResponse",
    "MockTransport",
    "RawResponse",
]
