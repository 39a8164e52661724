"""
Type definitions for middlewarechain.
"""

from typing import Any, Awaitable, Callable, Union

from .context import Context

# Anything that processes a request: (w, r), (ctx, *args) or plain coroutines
Handler = Callable[..., Any]

# Handler -> Handler
Middleware = Callable[[Handler], Handler]

# Continuation handed to a middleware function
Next = Callable[[Context], Union[Any, Awaitable[Any]]]

SyncMiddlewareFunc = Callable[[Context, Next], Any]
AsyncMiddlewareFunc = Callable[[Context, Next], Awaitable[Any]]
MiddlewareFunc = Union[SyncMiddlewareFunc, AsyncMiddlewareFunc]
