import logging
import time
import uuid

from fastapi import Request

logger = logging.getLogger("chore_wallet.request")


async def request_logger(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = int((time.perf_counter() - start) * 1000)

    status = response.status_code
    log_msg = f"{request.method} {request.url.path} | status={status} | {duration_ms}ms | id={request_id}"
    if status >= 500:
        logger.error(log_msg)
    elif status >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-Id"] = request_id
    return response
