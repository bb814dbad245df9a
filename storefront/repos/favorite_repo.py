# storefront/repos/favorite_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from storefront.data.database import dialect_insert
from storefront.data.models.favorite import FavoriteModel


class FavoriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_favorites(self, user_id: str) -> List[FavoriteModel]:
        stmt = (
            select(FavoriteModel)
            .options(joinedload(FavoriteModel.product))
            .where(FavoriteModel.user_id == user_id)
            .order_by(FavoriteModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_favorite(self, favorite_id: int) -> FavoriteModel | None:
        return self.db.get(FavoriteModel, favorite_id, options=[joinedload(FavoriteModel.product)])

    def get_user_favorite(self, user_id: str, product_id: int) -> FavoriteModel | None:
        stmt = (
            select(FavoriteModel)
            .options(joinedload(FavoriteModel.product))
            .where(FavoriteModel.user_id == user_id, FavoriteModel.product_id == product_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def insert_if_absent(self, user_id: str, product_id: int) -> None:
        insert = dialect_insert(self.db)
        table = FavoriteModel.__table__
        stmt = (
            insert(table)
            .values(user_id=user_id, product_id=product_id)
            .on_conflict_do_nothing(index_elements=[table.c.user_id, table.c.product_id])
        )
        self.db.execute(stmt)

    def delete_favorite(self, favorite: FavoriteModel) -> None:
        self.db.delete(favorite)

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
