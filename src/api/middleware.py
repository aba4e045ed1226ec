"""
HTTP middleware: request logging and CORS preflight.
"""

import logging
import time
import uuid

from fastapi import Request, Response, status

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


async def handle_preflight(request: Request, call_next):
    """Answer every OPTIONS request with 204 so browsers may call the API"""
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PREFLIGHT_HEADERS)
    return await call_next(request)


async def log_requests(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    started = time.perf_counter()
    logger.info(f"[{request_id}] Request received: {request.method} {request.url.path}")

    response = await call_next(request)

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"[{request_id}] Response {response.status_code} in {elapsed_ms:.1f}ms"
    )
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
