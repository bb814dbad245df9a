# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import OrderCreate, OrderOut, OrderDetailOut
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=List[OrderDetailOut])
def list_orders(
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db),
):
    """
    Orders of a user, newest first, with their items and products.
    """
    return get_service(db).list_orders(user_id)


@router.post("", response_model=OrderOut)
def place_order(payload: OrderCreate, db: Session = Depends(get_db)):
    """
    Creates the order and its items and empties the user's cart, all in one transaction.
    """
    svc = get_service(db)
    try:
        return svc.place_order(payload.user_id, payload.items)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
