"""
In-memory request and response recorder for exercising ``(w, r)`` handlers.

Handlers written against :class:`ResponseWriter` and :class:`Request` can be
chained and invoked directly in tests, with no server involved::

    w = ResponseRecorder()
    chain(handler, auth, logging_mw)(w, Request("GET", "/"))
    assert w.status_code == 200
"""

import dataclasses
import logging
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Callable, Dict, Protocol, Union

from .context import Context

logger = logging.getLogger(__name__)


@dataclass
class Request:
    """An incoming request as seen by a handler."""

    method: str = "GET"
    path: str = "/"
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    context: Context = field(default_factory=Context)

    def with_context(self, context: Context) -> "Request":
        """Return a shallow copy of this request carrying ``context``."""
        return dataclasses.replace(self, context=context)


class ResponseWriter(Protocol):
    headers: Dict[str, str]

    def write_header(self, status: int) -> None:
        ...

    def write(self, data: Union[bytes, str]) -> int:
        ...


HTTPHandler = Callable[[ResponseWriter, Request], None]


class ResponseRecorder:
    """
    ResponseWriter that keeps everything in memory.

    The status defaults to 200 OK. Only the first ``write_header`` call
    counts, and writing a body commits 200 if no status was set yet.
    """

    def __init__(self) -> None:
        self.headers: Dict[str, str] = {}
        self.status_code: int = HTTPStatus.OK
        self.wrote_header = False
        self._body = bytearray()

    def write_header(self, status: int) -> None:
        if self.wrote_header:
            logger.warning("superfluous write_header call with status %s (already %s)",
                           int(status), int(self.status_code))
            return
        self.status_code = status
        self.wrote_header = True

    def write(self, data: Union[bytes, str]) -> int:
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not self.wrote_header:
            self.write_header(HTTPStatus.OK)
        self._body.extend(data)
        return len(data)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    def __repr__(self) -> str:
        return f"ResponseRecorder(status_code={int(self.status_code)}, body={self.body!r})"
