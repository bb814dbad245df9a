# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import ProductOut, MAX_ID
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    return ProductService(db).list_products()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    try:
        return ProductService(db).get_product(product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
