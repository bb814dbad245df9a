# storefront/services/favorite_service.py
from typing import List

from sqlalchemy.orm import Session

from storefront.domain.schemas import FavoriteOut
from storefront.repos.favorite_repo import FavoriteRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class FavoriteService:
    def __init__(self, db: Session):
        self.repo = FavoriteRepo(db)
        self.user_repo = UserRepo(db)

    def list_favorites(self, user_id: str) -> List[FavoriteOut]:
        return [FavoriteOut.model_validate(f) for f in self.repo.get_user_favorites(user_id)]

    def add_favorite(self, user_id: str, product_id: int) -> FavoriteOut:
        """
        Idempotent: a second call for the same (user, product) returns the existing row.
        """
        try:
            self.user_repo.ensure_user(user_id)
            self.repo.insert_if_absent(user_id, product_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        favorite = self.repo.get_user_favorite(user_id, product_id)
        logger.info(f"Favorite {favorite.id}: user {user_id}, product {product_id}")
        return FavoriteOut.model_validate(favorite)

    def remove_favorite(self, favorite_id: int) -> FavoriteOut:
        if favorite_id <= 0:
            raise ValueError("Invalid id")

        favorite = self.repo.get_favorite(favorite_id)
        if not favorite:
            raise LookupError("Favorite not found")

        removed = FavoriteOut.model_validate(favorite)

        try:
            self.repo.delete_favorite(favorite)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Removed favorite {favorite_id} of user {removed.user_id}")
        return removed
