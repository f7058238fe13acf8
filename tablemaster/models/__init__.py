from tablemaster.models.user import User, UserRole
from tablemaster.models.table import DiningTable, TableStatus
from tablemaster.models.guest import Guest
from tablemaster.models.menu import MenuCategory, MenuItem
from tablemaster.models.prefixed_menu import PrefixedMenu
from tablemaster.models.order import Order, OrderItem, OrderStatus, OrderItemStatus
from tablemaster.models.access_request import AccessRequest, AccessRequestStatus
from tablemaster.models.change_request import ChangeRequest, ChangeRequestStatus, ChangeAction, EntityType

__all__ = [
    "User", "UserRole", "DiningTable", "TableStatus", "Guest", "MenuCategory", "MenuItem",
    "PrefixedMenu", "Order", "OrderItem", "OrderStatus", "OrderItemStatus",
    "AccessRequest", "AccessRequestStatus", "ChangeRequest", "ChangeRequestStatus", "ChangeAction", "EntityType",
]
