# storefront/services/order_service.py
from decimal import Decimal
from typing import List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.domain.schemas import OrderLineIn, OrderOut, OrderDetailOut, MAX_MONEY_DIGITS, MONEY_PLACES
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def order_total(items: List[OrderLineIn]) -> Decimal:
    return sum((i.price * i.quantity for i in items), Decimal("0.00"))


#largest value orders.total (NUMERIC(10, 2)) can hold
MAX_TOTAL = Decimal(10) ** (MAX_MONEY_DIGITS - MONEY_PLACES) - Decimal("0.01")


class OrderService:
    """
    Orders domain, kept separate from CartService.
    Checkout only touches the cart to empty it.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)

    def list_orders(self, user_id: str) -> List[OrderDetailOut]:
        return [OrderDetailOut.model_validate(o) for o in self.repo.get_user_orders(user_id)]

    def place_order(self, user_id: str, items: List[OrderLineIn]) -> OrderOut:
        """
        Use case: checkout.

        1. computes the total from the submitted prices
        2. creates the order
        3. creates one order item per submitted line
        4. clears the user's cart

        Steps 2-4 are one transaction, any failure rolls all of them back.
        """
        if not items:
            raise ValueError("items must not be empty")

        #prices come from the client (price locked at cart time), product table is not consulted
        total = order_total(items)
        if total > MAX_TOTAL:
            raise ValueError(f"Order total must not exceed {MAX_TOTAL}")

        try:
            order = self.repo.add_order(OrderModel(user_id=user_id, total=total))

            for line in items:
                self.repo.add_order_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.price,
                    )
                )

            cleared = self.cart_repo.clear_cart(user_id)
            self.repo.commit()
        except Exception as e:
            logger.error(f"Checkout of user {user_id} failed, rolling back: {e}")
            self.repo.rollback()
            raise

        self.repo.refresh(order)
        logger.info(
            f"Order {order.id} placed by user {user_id}: {len(items)} lines, "
            f"total {total}, {cleared} cart items cleared"
        )
        return OrderOut.model_validate(order)
