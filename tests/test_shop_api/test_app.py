import httpx
import pytest
from fastapi import HTTPException, status

from shop.errors import DuplicateEmailError, InvalidOrderError, NotFoundError, ShopError
from shop_api.services.errors import to_http_exception, translate_shop_errors


@pytest.mark.asyncio
async def test_health(app_client: httpx.AsyncClient):
    response = await app_client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_root(app_client: httpx.AsyncClient):
    response = await app_client.get("/")

    assert response.json()["documentation"] == "/v1/docs"


@pytest.mark.asyncio
async def test_metrics_hidden_from_ingress(app_client: httpx.AsyncClient):
    response = await app_client.get("/metrics", headers={"X-Forwarded-For": "1.2.3.4"})

    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize(
    "error, expected",
    [
        (NotFoundError("Order", "42"), status.HTTP_404_NOT_FOUND),
        (DuplicateEmailError("a@b.c"), status.HTTP_409_CONFLICT),
        (InvalidOrderError("empty"), status.HTTP_422_UNPROCESSABLE_ENTITY),
        (ShopError("other"), status.HTTP_400_BAD_REQUEST),
    ],
)
def test_to_http_exception(error, expected):
    exc = to_http_exception(error)

    assert exc.status_code == expected
    assert exc.detail == str(error)


@pytest.mark.asyncio
async def test_translate_shop_errors_keeps_other_errors():
    @translate_shop_errors
    async def boom():
        raise KeyError("not a shop error")

    with pytest.raises(KeyError):
        await boom()


@pytest.mark.asyncio
async def test_translate_shop_errors_raises_http_exception():
    @translate_shop_errors
    async def missing():
        raise NotFoundError("Item", "x")

    with pytest.raises(HTTPException) as exc_info:
        await missing()
    assert exc_info.value.status_code == status.HTTP_404_NOT_FOUND
