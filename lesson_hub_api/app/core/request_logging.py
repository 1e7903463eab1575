"""
Request/response logging middleware.

``register_request_logging`` adds an HTTP middleware stage that wraps
every handler: it logs the method, path and client address when a
request arrives, the JSON body of write requests when enabled, and the
response status together with the elapsed time once the handler has
produced a response.
"""

import json
import logging
import time

from fastapi import FastAPI, Request


logger = logging.getLogger("lesson_hub_api.requests")

_BODY_METHODS = {"POST", "PUT", "PATCH"}


def _format_body(body: bytes) -> str:
    try:
        return json.dumps(json.loads(body), indent=2, ensure_ascii=False)
    except ValueError:
        return f"<{len(body)} bytes>"


def register_request_logging(app: FastAPI, log_bodies: bool = True) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"
        logger.info("%s %s - IP: %s", request.method, target, client)

        if log_bodies and request.method in _BODY_METHODS:
            body = await request.body()
            if body:
                logger.info("Request body: %s", _format_body(body))

        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.error("%s %s raised after %.1f ms", request.method, target, elapsed_ms)
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s - Response status: %s (%.1f ms)",
            request.method,
            target,
            response.status_code,
            elapsed_ms,
        )
        return response
