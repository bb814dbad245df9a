# storefront/services/cart_service.py
from typing import List, Optional

from sqlalchemy.orm import Session

from storefront.domain.schemas import CartItemOut
from storefront.repos.cart_repo import CartRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use cases of the cart domain.
    query (get_cart) only reads, commands (add, remove, adjust) commit
    their own transaction and roll it back on any error.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.user_repo = UserRepo(db)

    #query
    def get_cart(self, user_id: str) -> List[CartItemOut]:
        return [CartItemOut.model_validate(i) for i in self.repo.get_user_items(user_id)]

    #commands
    def add_to_cart(self, user_id: str, product_id: int, quantity: Optional[int] = None) -> CartItemOut:
        if quantity is not None and quantity < 0:
            raise ValueError("quantity must not be negative")

        #omitted or 0 means a single piece
        quantity = quantity or 1

        try:
            #cart_items.user_id is a foreign key, the user row has to exist first
            self.user_repo.ensure_user(user_id)
            self.repo.upsert_item(user_id, product_id, quantity)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        item = self.repo.get_user_item(user_id, product_id)
        logger.info(f"Added {quantity} x product {product_id} to cart of user {user_id}, now {item.quantity}")
        return CartItemOut.model_validate(item)

    def remove_item(self, item_id: int) -> CartItemOut:
        if item_id <= 0:
            raise ValueError("Invalid id")

        item = self.repo.get_item(item_id)
        if not item:
            raise LookupError("Cart item not found")

        #snapshot before the row is gone
        removed = CartItemOut.model_validate(item)

        try:
            self.repo.delete_item(item)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Removed cart item {item_id} of user {removed.user_id}")
        return removed

    def adjust_item(self, item_id: int, delta: int) -> CartItemOut | None:
        """
        Changes the quantity of a cart item by ``delta``.
        Returns None when the quantity dropped to 0 or below and the row was deleted.
        """
        if item_id <= 0 or not delta:
            raise ValueError("Invalid request")

        try:
            #applied in the database, a concurrent change is never overwritten
            if not self.repo.change_quantity(item_id, delta):
                raise LookupError("Cart item not found")
            deleted = self.repo.delete_if_empty(item_id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        if deleted:
            logger.info(f"Cart item {item_id} dropped to zero after delta {delta}, deleted")
            return None

        item = self.repo.get_item(item_id)
        if not item:
            #removed by another request right after our update
            raise LookupError("Cart item not found")
        logger.info(f"Cart item {item_id} quantity changed by {delta} to {item.quantity}")
        return CartItemOut.model_validate(item)
