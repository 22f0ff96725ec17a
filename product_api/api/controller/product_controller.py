"""REST controller for the product resource."""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from product_api.services import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def get_product_repository(request: Request) -> ProductRepository:
    """Resolve the repository the application was built with."""
    return request.app.state.product_repository


@router.post("")
async def create_product(
    payload: Dict[str, Any] = Body(...),
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    product = await repository.create(payload)
    logger.info(f"Created product {product.id}")
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=product.to_dict())


@router.get("")
async def list_products(
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    products = await repository.find_all()
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content=[product.to_dict() for product in products],
    )


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    product = await repository.find_by_id(product_id)
    if product is None:
        logger.info(f"Product {product_id} not found")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return JSONResponse(status_code=status.HTTP_200_OK, content=product.to_dict())


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    patch: Dict[str, Any] = Body(...),
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    """Apply a full or partial update and return the updated record."""
    product = await repository.update_by_id(product_id, patch)
    if product is None:
        logger.info(f"Product {product_id} not found for update")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    logger.info(f"Updated product {product_id}")
    return JSONResponse(status_code=status.HTTP_200_OK, content=product.to_dict())


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    repository: ProductRepository = Depends(get_product_repository),
) -> Response:
    """Delete a product and return the removed record."""
    product = await repository.delete_by_id(product_id)
    if product is None:
        logger.info(f"Product {product_id} not found for delete")
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    logger.info(f"Deleted product {product_id}")
    return JSONResponse(status_code=status.HTTP_200_OK, content=product.to_dict())
