# storefront/api/routers/favorites.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import FavoriteIn, FavoriteOut, MAX_ID
from storefront.services.favorite_service import FavoriteService

router = APIRouter(prefix="/api/favorites", tags=["favorites"])


@router.get("", response_model=List[FavoriteOut])
def list_favorites(
    user_id: str = Query(..., alias="userId", min_length=1),
    db: Session = Depends(get_db),
):
    return FavoriteService(db).list_favorites(user_id)


@router.post("", response_model=FavoriteOut)
def add_favorite(payload: FavoriteIn, db: Session = Depends(get_db)):
    return FavoriteService(db).add_favorite(payload.user_id, payload.product_id)


@router.delete("/{favorite_id}", response_model=FavoriteOut)
def remove_favorite(favorite_id: int = Path(..., le=MAX_ID), db: Session = Depends(get_db)):
    try:
        return FavoriteService(db).remove_favorite(favorite_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
