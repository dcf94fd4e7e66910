"""Pydantic request/response schemas for the Storefront API.

These are external contracts, separate from internal Protean commands.
Quantities and statuses are deliberately loose here; the domain validates
them so that every rejection carries the same 400 error shape.
"""

from pydantic import BaseModel, Field, StrictInt


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class SignupRequest(BaseModel):
    name: str
    email: str
    telephone: str | None = None
    password: str = Field(min_length=8)


class ChangeRoleRequest(BaseModel):
    role: str


class UserIdResponse(BaseModel):
    user_id: str


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    description: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=0, default=0)
    stock: int = Field(ge=0, default=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Black T-Shirt",
                    "description": "Cotton crew neck",
                    "price": 19.99,
                    "quantity": 1,
                    "stock": 120,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    price: float | None = Field(ge=0, default=None)
    stock: int | None = Field(ge=0, default=None)


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str | None = None
    price: float
    quantity: int
    stock: int
    is_available: bool


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderLineRequest(BaseModel):
    product_id: str
    quantity: StrictInt


class PlaceOrderRequest(BaseModel):
    items: list[OrderLineRequest]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"product_id": "prod-001", "quantity": 2},
                        {"product_id": "prod-002", "quantity": 1},
                    ]
                }
            ]
        }
    }


class PlaceOrderResponse(BaseModel):
    order_id: str
    user_id: str
    total_price: float
    status: str
    created_at: str | None


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str | None = None
    quantity: int
    unit_price: float
    total_price: float


class OrderResponse(PlaceOrderResponse):
    items: list[OrderItemResponse] = []


class OrderListResponse(BaseModel):
    message: str
    orders: list[OrderResponse]


class UpdateOrderStatusRequest(BaseModel):
    status: str


class StatusResponse(BaseModel):
    status: str = "ok"
    message: str | None = None
