#import all models so SQLAlchemy registers them in Base.metadata

from stash.data.models.user import UserModel
from stash.data.models.product import ProductModel, ProductTagModel
from stash.data.models.cart import CartModel
from stash.data.models.cart_item import CartItemModel
from stash.data.models.order import OrderModel

__all__ = ["UserModel", "ProductModel", "ProductTagModel", "CartModel", "CartItemModel", "OrderModel"]
