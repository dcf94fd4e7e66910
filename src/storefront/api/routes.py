"""FastAPI routes for users, the product catalogue and orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import acting_user_id
from storefront.api.errors import error_response
from storefront.api.schemas import (
    ChangeRoleRequest,
    CreateProductRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    SignupRequest,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
    UserIdResponse,
)
from storefront.catalogue.management import AddProduct, DiscontinueProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.errors import OrderNotFound, ProductNotFound
from storefront.identity.registration import ChangeUserRole, RegisterUser
from storefront.identity.user import Role, User
from storefront.ordering.assembly import OrderAssembler, OrderView
from storefront.ordering.cancellation import CancelOrder
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.status_update import UpdateOrderStatus


def _order_response(view: OrderView) -> OrderResponse:
    return OrderResponse(
        order_id=view.order_id,
        user_id=view.user_id,
        total_price=view.total_price,
        status=view.status,
        created_at=view.created_at,
        items=[
            OrderItemResponse(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=item.total_price,
            )
            for item in view.items
        ],
    )


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        description=product.description,
        price=product.price,
        quantity=product.quantity or 0,
        stock=product.stock or 0,
        is_available=bool(product.is_available),
    )


def _assembler() -> OrderAssembler:
    return OrderAssembler(current_domain.repository_for(Order))


# ---------------------------------------------------------------------------
# User Router
# ---------------------------------------------------------------------------
user_router = APIRouter(prefix="/users", tags=["users"])


@user_router.post("/signup", status_code=201, response_model=UserIdResponse)
async def signup(body: SignupRequest) -> UserIdResponse:
    # Public signup always yields a plain user; admins are promoted by admins
    command = RegisterUser(
        name=body.name,
        email=body.email,
        telephone=body.telephone,
        password=body.password,
        role=Role.USER.value,
    )
    result = current_domain.process(command, asynchronous=False)
    return UserIdResponse(user_id=result)


@user_router.patch("/{user_id}/role", response_model=StatusResponse)
async def change_role(
    user_id: str,
    body: ChangeRoleRequest,
    actor_id: str = Depends(acting_user_id),
) -> StatusResponse:
    command = ChangeUserRole(user_id=user_id, role=body.role, actor_id=actor_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Role updated successfully")


# ---------------------------------------------------------------------------
# Product Router
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest, actor_id: str = Depends(acting_user_id)) -> ProductIdResponse:
    command = AddProduct(
        actor_id=actor_id,
        name=body.name,
        description=body.description,
        price=body.price,
        quantity=body.quantity,
        stock=body.stock,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    products = current_domain.repository_for(Product).list_all()
    return ProductListResponse(products=[_product_response(p) for p in products])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    try:
        product = current_domain.repository_for(Product).find_by_id(product_id)
    except ProductNotFound as exc:
        return error_response(404, exc.message)
    return _product_response(product)


@product_router.patch("/{product_id}", response_model=StatusResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    actor_id: str = Depends(acting_user_id),
) -> StatusResponse:
    command = UpdateProduct(
        actor_id=actor_id,
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Product updated successfully")


@product_router.patch("/{product_id}/discontinue", response_model=StatusResponse)
async def discontinue_product(product_id: str, actor_id: str = Depends(acting_user_id)) -> StatusResponse:
    command = DiscontinueProduct(actor_id=actor_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(message="Product discontinued")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(tags=["orders"])


@order_router.post("/user/place/order", response_model=PlaceOrderResponse)
async def place_order(body: PlaceOrderRequest, user_id: str = Depends(acting_user_id)) -> PlaceOrderResponse:
    """Place an order for the authenticated user.

    1. Build and persist the order (user check, price snapshot, totals)
    2. Reload it with details and project the response
    """
    command = PlaceOrder(
        user_id=user_id,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    order_id = current_domain.process(command, asynchronous=False)

    view = _assembler().assemble_one(order_id)
    return PlaceOrderResponse(
        order_id=view.order_id,
        user_id=view.user_id,
        total_price=view.total_price,
        status=view.status,
        created_at=view.created_at,
    )


@order_router.get("/user/orders", response_model=OrderListResponse)
async def list_user_orders(user_id: str = Depends(acting_user_id)) -> OrderListResponse:
    current_domain.repository_for(User).find_by_id(user_id)

    views = _assembler().for_user(user_id)
    if not views:
        return OrderListResponse(message="No orders found", orders=[])
    return OrderListResponse(
        message="Orders retrieved successfully",
        orders=[_order_response(view) for view in views],
    )


@order_router.patch("/cancel/order/{order_id}", response_model=StatusResponse)
async def cancel_order(order_id: str, actor_id: str = Depends(acting_user_id)) -> StatusResponse:
    command = CancelOrder(order_id=order_id, actor_id=actor_id)
    current_domain.process(command, asynchronous=False)
    return StatusResponse(status="canceled", message="Order canceled successfully")


@order_router.patch("/update/order/{order_id}", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    actor_id: str = Depends(acting_user_id),
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, actor_id=actor_id)
    try:
        current_domain.process(command, asynchronous=False)
    except OrderNotFound as exc:
        # A missing order on this route is a bad reference, not a missing resource
        return error_response(400, exc.message)

    return _order_response(_assembler().assemble_one(order_id))
