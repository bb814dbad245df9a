# storefront/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    CartItemIn,
    CartItemAdjust,
    CartItemOut,
    DeletedOut,
    MAX_ID,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=List[CartItemOut])
def get_cart(
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(user_id)


@router.post("", response_model=CartItemOut)
def add_to_cart(payload: CartItemIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.add_to_cart(
            user_id=payload.user_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{item_id}", response_model=CartItemOut)
def remove_item(item_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.remove_item(item_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{item_id}", response_model=None)
def adjust_item(payload: CartItemAdjust, item_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        item = svc.adjust_item(item_id, payload.delta)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))

    #either the updated item or {"ok": true, "deleted": true}
    if item is None:
        return DeletedOut()
    return item
