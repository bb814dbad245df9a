# storefront/repos/user_repo.py
from sqlalchemy.orm import Session

from storefront.data.database import dialect_insert
from storefront.data.models.user import UserModel


def placeholder_email(user_id: str) -> str:
    return f"{user_id}@placeholder.com"


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def ensure_user(self, user_id: str) -> None:
        """
        Idempotently creates the user row that cart items and favorites point at.
        Existing rows are left untouched. Does not commit.
        """
        insert = dialect_insert(self.db)
        stmt = (
            insert(UserModel.__table__)
            .values(id=user_id, email=placeholder_email(user_id))
            .on_conflict_do_nothing(index_elements=["id"])
        )
        self.db.execute(stmt)
