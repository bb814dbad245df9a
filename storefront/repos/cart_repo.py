# storefront/repos/cart_repo.py
from typing import List

from sqlalchemy import select, delete, update
from sqlalchemy.orm import Session, joinedload

from storefront.data.database import dialect_insert
from storefront.data.models.cart_item import CartItemModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_items(self, user_id: str) -> List[CartItemModel]:
        stmt = (
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_item(self, item_id: int) -> CartItemModel | None:
        return self.db.get(CartItemModel, item_id, options=[joinedload(CartItemModel.product)])

    def get_user_item(self, user_id: str, product_id: int) -> CartItemModel | None:
        stmt = (
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id, CartItemModel.product_id == product_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def upsert_item(self, user_id: str, product_id: int, quantity: int) -> None:
        """
        INSERT ... ON CONFLICT (user_id, product_id) DO UPDATE SET quantity = quantity + excluded.quantity

        Single statement, so two concurrent adds of the same product end up
        in one row with the summed quantity.
        """
        insert = dialect_insert(self.db)
        table = CartItemModel.__table__
        stmt = insert(table).values(user_id=user_id, product_id=product_id, quantity=quantity)
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.user_id, table.c.product_id],
            set_={"quantity": table.c.quantity + stmt.excluded.quantity},
        )
        self.db.execute(stmt)

    def change_quantity(self, item_id: int, delta: int) -> bool:
        """
        UPDATE cart_items SET quantity = quantity + :delta WHERE id = :id

        Relative to the stored value, so concurrent changes add up instead of
        overwriting each other. Returns False when there is no such row.
        """
        stmt = (
            update(CartItemModel)
            .where(CartItemModel.id == item_id)
            .values(quantity=CartItemModel.quantity + delta)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount > 0

    def delete_if_empty(self, item_id: int) -> bool:
        stmt = (
            delete(CartItemModel)
            .where(CartItemModel.id == item_id, CartItemModel.quantity <= 0)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount > 0

    def delete_item(self, item: CartItemModel) -> None:
        self.db.delete(item)

    def clear_cart(self, user_id: str) -> int:
        result = self.db.execute(delete(CartItemModel).where(CartItemModel.user_id == user_id))
        return result.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
