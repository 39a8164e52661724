#!/usr/bin/env python3
"""
Basic usage examples for middlewarechain.

Builds a small request pipeline out of caller-supplied middlewares
(logging, authentication, rate limiting, recovery) and runs a few
requests through it with the in-memory recorder.
"""

import logging
import threading
import time
from dataclasses import dataclass
from http import HTTPStatus

from middlewarechain import chain, compose
from middlewarechain.httptest import HTTPHandler, Request, ResponseRecorder

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    """Settings for the example pipeline."""
    api_token: str = "secret-token"
    rate_limit: int = 3  # requests per window
    rate_window: float = 10.0


# Example 1: Logging middleware
def logging_middleware(next_handler: HTTPHandler) -> HTTPHandler:
    def handler(w, r):
        start = time.perf_counter()
        logger.info("--> %s %s", r.method, r.path)
        next_handler(w, r)
        logger.info("<-- %s %s %d (%.2f ms)", r.method, r.path, w.status_code,
                    (time.perf_counter() - start) * 1000)
    return handler


# Example 2: Authentication, short-circuits on a bad token
def auth_middleware(config):
    def wrap(next_handler: HTTPHandler) -> HTTPHandler:
        def handler(w, r):
            token = r.headers.get("Authorization", "").removeprefix("Bearer ")
            if token != config.api_token:
                w.write_header(HTTPStatus.UNAUTHORIZED)
                w.write("unauthorized")
                return
            next_handler(w, r.with_context(r.context.derive(user="api-client")))
        return handler
    return wrap


# Example 3: Rate limiting, state owned by the closure
def rate_limit_middleware(config):
    lock = threading.Lock()
    calls = []

    def wrap(next_handler: HTTPHandler) -> HTTPHandler:
        def handler(w, r):
            now = time.monotonic()
            with lock:
                calls[:] = [t for t in calls if now - t < config.rate_window]
                allowed = len(calls) < config.rate_limit
                if allowed:
                    calls.append(now)
            if not allowed:
                w.write_header(HTTPStatus.TOO_MANY_REQUESTS)
                w.write("rate limit exceeded")
                return
            next_handler(w, r)
        return handler
    return wrap


# Example 4: Recovery, turns handler failures into 500 responses
def recovery_middleware(next_handler: HTTPHandler) -> HTTPHandler:
    def handler(w, r):
        try:
            next_handler(w, r)
        except Exception:
            logger.exception("handler failed for %s %s", r.method, r.path)
            w.write_header(HTTPStatus.INTERNAL_SERVER_ERROR)
            w.write("internal error")
    return handler


def hello_handler(w, r):
    if r.path == "/boom":
        raise RuntimeError("backend unreachable")
    w.write(f"hello, {r.context.get('user', 'anonymous')}")


def main():
    config = AppConfig()

    # Reusable outer stack, first listed runs first
    edge = compose(logging_middleware, recovery_middleware)
    app = chain(hello_handler, edge, rate_limit_middleware(config), auth_middleware(config))

    requests = [
        Request("GET", "/hello", headers={"Authorization": f"Bearer {config.api_token}"}),
        Request("GET", "/hello"),
        Request("GET", "/boom", headers={"Authorization": f"Bearer {config.api_token}"}),
        Request("GET", "/hello", headers={"Authorization": f"Bearer {config.api_token}"}),
    ]
    for request in requests:
        w = ResponseRecorder()
        app(w, request)
        print(f"{request.path}: {int(w.status_code)} {w.text}")


if __name__ == "__main__":
    main()
