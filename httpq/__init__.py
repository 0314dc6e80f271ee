# ruff: noqa: I001
from .__version__ import __description__, __title__, __version__
from ._api import *
from ._config import DEFAULT_HEADERS, USER_AGENT
from ._content import *
from ._encoding import decode, encode
from ._exceptions import *
from ._models import *
from ._transports import *
from ._urls import *

_members = [
    member
    for member in list(vars().keys())
    if not member.startswith("_")
    or member in ["__description__", "__title__", "__version__"]
]

__all__ = sorted(_members, key=str.casefold)  # pyright: ignore[reportUnsupportedDunderAll]
