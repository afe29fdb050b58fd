"""Translation of shop domain errors into HTTP errors"""

import functools
import logging

from fastapi import HTTPException, status

from shop.errors import (
    DuplicateEmailError,
    DuplicateSkuError,
    InvalidItemError,
    InvalidOrderError,
    InvalidStatusTransition,
    NotFoundError,
    ShopError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[ShopError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateEmailError: status.HTTP_409_CONFLICT,
    DuplicateSkuError: status.HTTP_409_CONFLICT,
    InvalidOrderError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidItemError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidStatusTransition: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def to_http_exception(error: ShopError) -> HTTPException:
    status_code = next(
        (code for cls, code in STATUS_BY_ERROR.items() if isinstance(error, cls)),
        status.HTTP_400_BAD_REQUEST,
    )
    return HTTPException(status_code=status_code, detail=str(error))


def translate_shop_errors(func):
    """Re-raise shop errors raised by an async service as HTTPException."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ShopError as e:
            logger.warning(f"{func.__name__} failed: {e}")
            raise to_http_exception(e) from e

    return wrapper
