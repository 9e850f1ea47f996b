"""
Request / response logging middleware.
"""

import time

from fastapi import Request
from loguru import logger

from aarya.middleware.error_handler import SOURCE_HEADER


async def logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = round((time.perf_counter() - start) * 1000, 2)

    source = response.headers.get(SOURCE_HEADER)
    answered = f" answered={source}" if source else ""
    logger.info(f"{request.method} {request.url.path} [{response.status_code}]{answered} {elapsed}ms")
    return response
