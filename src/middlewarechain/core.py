"""
Chain composition and the ``(ctx, next)`` middleware adapter.
"""

import asyncio
import functools
import inspect
import logging
from typing import Any

from .context import Context
from .errors import ConfigurationError
from .types import Handler, Middleware, MiddlewareFunc

logger = logging.getLogger(__name__)


def chain(handler: Handler, *middlewares: Middleware) -> Handler:
    """
    Wrap ``handler`` in ``middlewares`` and return the aggregate handler.

    The first middleware is the outermost layer: ``chain(h, m1, m2, m3)``
    is ``m1(m2(m3(h)))``, so invoking the result runs ``m1`` first and
    ``h`` last. With no middlewares ``handler`` itself is returned.

    Nothing is validated or caught. Whatever a middleware raises, while
    wrapping or while handling a request, reaches the caller unchanged.
    """
    aggregate = handler
    for wrap in reversed(middlewares):
        aggregate = wrap(aggregate)
    return aggregate


def compose(*middlewares: Middleware) -> Middleware:
    """
    Fold several middlewares into one.

    ``compose(m1, m2)(h)`` behaves like ``chain(h, m1, m2)``, which makes
    reusable stacks possible: ``chain(h, compose(m1, m2), m3)``.
    """
    def composed(handler: Handler) -> Handler:
        return chain(handler, *middlewares)

    return composed


def _split_context(args: tuple) -> tuple:
    if args and isinstance(args[0], Context):
        return args[0], args[1:]
    return Context(), args


def middleware(func: MiddlewareFunc) -> Middleware:
    """
    Turn a ``func(ctx, next)`` function into a Handler -> Handler wrapper.

    The result works as a decorator and as a ``chain`` argument. Wrapped
    handlers are called as ``handler(ctx, *args, **kwargs)``; when no
    Context is passed in, a fresh one is created for the call. ``next(ctx)``
    runs the inner handler with the given context and the original
    arguments, so a middleware may hand down a derived context.

    Async middleware functions always produce async handlers, and await
    whatever awaitable the inner handler returns. A sync middleware
    function whose inner handler returns a coroutine drives it with
    ``asyncio.run`` and therefore needs to be called outside a running
    event loop. Handlers shaped like ``(w, r)`` take no Context; wrap those
    with plain Handler -> Handler middlewares instead.
    """
    if not callable(func):
        raise ConfigurationError(
            f"middleware() expects a callable taking (ctx, next), got {type(func).__name__}",
            field="func",
        ).add_suggestion("Decorate a function defined as `def name(ctx, next): ...`")

    is_async_middleware = inspect.iscoroutinefunction(func)

    def decorator(handler: Handler) -> Handler:
        # Async-ness is judged per call from the result, so callable objects
        # with an async __call__ work too
        if is_async_middleware:
            @functools.wraps(handler)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                ctx, rest = _split_context(args)

                async def next_fn(context: Context) -> Any:
                    result = handler(context, *rest, **kwargs)
                    if inspect.isawaitable(result):
                        return await result
                    return result

                return await func(ctx, next_fn)

            return async_wrapper

        @functools.wraps(handler)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            ctx, rest = _split_context(args)

            def next_fn(context: Context) -> Any:
                result = handler(context, *rest, **kwargs)
                if inspect.iscoroutine(result):
                    logger.debug("Running async handler %s from sync middleware %s",
                                 getattr(handler, '__name__', type(handler).__name__),
                                 getattr(func, '__name__', type(func).__name__))
                    return asyncio.run(result)
                return result

            return func(ctx, next_fn)

        return wrapper

    return decorator
