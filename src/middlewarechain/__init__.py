"""
middlewarechain - compose middleware wrappers around a request handler.
"""

import logging

from .core import chain, compose, middleware
from .context import Context
from .errors import ConfigurationError, ContextError, MiddlewareError
from .types import Handler, Middleware, MiddlewareFunc, Next

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "chain",
    "compose",
    "middleware",
    "Context",
    "MiddlewareError",
    "ConfigurationError",
    "ContextError",
    "Handler",
    "Middleware",
    "MiddlewareFunc",
    "Next",
]
