from fastapi import APIRouter

from shop_api.api.v1.endpoints import customers, items, orders

api_router = APIRouter()

api_router.include_router(customers.router, prefix="/customers", tags=["Customers"])
api_router.include_router(items.router, prefix="/items", tags=["Items"])
api_router.include_router(orders.router, prefix="/orders", tags=["Orders"])
