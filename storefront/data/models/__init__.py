#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.product import ProductModel
from storefront.data.models.user import UserModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.favorite import FavoriteModel
from storefront.data.models.order import OrderModel, OrderItemModel

__all__ = ["ProductModel", "UserModel", "CartItemModel", "FavoriteModel", "OrderModel", "OrderItemModel"]
