# shopfront/routers/products.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse

from shopfront.core.auth import require_auth
from shopfront.core.responses import send_created, send_success
from shopfront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


# -------- Public endpoints --------


@router.get("")
def list_products(service: ProductService = Depends(get_product_service)) -> JSONResponse:
    """
    List every product.

    - Public endpoint.
    """
    return send_success(service.list_products(), "Products retrieved successfully")


@router.get("/{product_id}")
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Get a single product by id.

    - Public endpoint.
    """
    return send_success(service.get_product(product_id), "Product retrieved successfully")


# -------- Authenticated endpoints --------


@router.post("", dependencies=[Depends(require_auth)], status_code=201)
def create_product(
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Create a new product. Requires name, description, price and stock.
    """
    return send_created(service.create_product(payload), "Product created successfully")


@router.put("/{product_id}", dependencies=[Depends(require_auth)])
def replace_product(
    product_id: str,
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Replace a product. All four fields are required.
    """
    return send_success(
        service.replace_product(product_id, payload), "Product updated successfully"
    )


@router.patch("/{product_id}", dependencies=[Depends(require_auth)])
def patch_product(
    product_id: str,
    payload: Any = Body(None),
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Partially update a product.

    Only name, description, price and stock may be sent; any other key
    rejects the whole request.
    """
    return send_success(
        service.patch_product(product_id, payload), "Product partially updated successfully"
    )


@router.delete("/{product_id}", dependencies=[Depends(require_auth)])
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> JSONResponse:
    """
    Delete a product.
    """
    service.delete_product(product_id)
    return send_success({"id": product_id}, "Product deleted successfully")
