from __future__ import annotations

from .__version__ import __version__

USER_AGENT = f"python-httpq/{__version__}"

DEFAULT_METHOD = "GET"

DEFAULT_HEADERS = {
    "User-Agent": USER_AGENT,
    "Connection": "close",
}

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Size of the intermediate buffer used to copy stream bodies.
BUFFER_SIZE = 1000

DEFAULT_ENCODING = "utf-8"
