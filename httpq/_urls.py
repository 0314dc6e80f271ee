from __future__ import annotations

import typing

from ._encoding import encode
from ._exceptions import InvalidURL
from ._urlparse import urlparse

__all__ = ["URL", "build_url"]


class URL:
    """
    An absolute URL, parsed and normalised.

    url = httpq.URL("https://www.example.com/search?q=python#results")

    assert url.scheme == "https"
    assert url.host == "www.example.com"
    assert url.port is None
    assert url.path == "/search"
    assert url.query == "q=python"
    assert url.fragment == "results"
    assert url.raw_path == "/search?q=python"
    """

    def __init__(self, url: str | URL) -> None:
        if isinstance(url, URL):
            self._uri_reference = url._uri_reference
            return
        if not isinstance(url, str):
            raise TypeError(
                f"Invalid type for url.  Expected str or httpq.URL, got {type(url)}: {url!r}"
            )
        self._uri_reference = urlparse(url)
        if not self._uri_reference.scheme:
            raise InvalidURL(f"No scheme included in the URL {url!r}.")
        if self._uri_reference.scheme in ("http", "https") and not self._uri_reference.host:
            raise InvalidURL(f"No host included in the URL {url!r}.")

    @property
    def scheme(self) -> str:
        return self._uri_reference.scheme

    @property
    def userinfo(self) -> str:
        return self._uri_reference.userinfo

    @property
    def host(self) -> str:
        return self._uri_reference.host

    @property
    def port(self) -> int | None:
        return self._uri_reference.port

    @property
    def netloc(self) -> str:
        return self._uri_reference.netloc

    @property
    def path(self) -> str:
        return self._uri_reference.path or "/"

    @property
    def query(self) -> str | None:
        return self._uri_reference.query

    @property
    def fragment(self) -> str | None:
        return self._uri_reference.fragment

    @property
    def raw_path(self) -> str:
        """
        The request target sent on the wire: path plus query, never the fragment.
        """
        query = self._uri_reference.query
        return self.path if query is None else f"{self.path}?{query}"

    def __hash__(self) -> int:
        return hash(str(self))

    def __eq__(self, other: typing.Any) -> bool:
        return isinstance(other, (URL, str)) and str(self) == str(other)

    def __str__(self) -> str:
        return str(self._uri_reference)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"


def build_url(
    base: str | URL,
    query: typing.Any = None,
    fragment: typing.Any = None,
) -> URL:
    """
    Return a `URL` from a base, with an optional query and fragment appended.

    Both the query (a string or a mapping of parameters) and the fragment are
    form-urlencoded. The query always comes before the fragment.

    build_url("http://www.example.com/")
    # http://www.example.com/
    build_url("http://www.example.com/search", {"q": "python"})
    # http://www.example.com/search?q=python
    build_url("http://www.example.com/search", {"q": "python"}, "nav")
    # http://www.example.com/search?q=python#nav
    build_url("http://daringfireball.net", fragment="Footer")
    # http://daringfireball.net#Footer
    """
    if query is None and fragment is None:
        return base if isinstance(base, URL) else URL(base)

    url = str(base)
    if query is not None:
        url += "?" + encode(query)
    if fragment is not None:
        url += "#" + encode(fragment)
    return URL(url)
