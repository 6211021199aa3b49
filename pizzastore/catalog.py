import logging
import sqlite3
from dataclasses import dataclass
from enum import Enum

from termcolor import cprint

from .config import SEPARATOR
from .database import DatabaseManager, normalize
from .helpers import color_money

logger = logging.getLogger(__name__)


# domain models
@dataclass(frozen=True)
class Item:
    """catalog row"""
    name: str
    ingredients: str
    type_of_item: str
    price: float
    description: str | None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Item":
        """build from a positional catalog row"""
        return cls(row[0], row[1], row[2], row[3], row[4])


class SortOrder(Enum):
    """final ordering on price"""
    NONE = None
    ASCENDING = "ASC"
    DESCENDING = "DESC"


# catalog queries
class CatalogManager:
    """build and run filtered catalog queries"""
    BASE_QUERY = "SELECT itemName, ingredients, typeOfItem, price, description FROM Items"

    def __init__(self, db: DatabaseManager):
        self.db = db

    @classmethod
    def build_query(cls, max_price: float | None = None, item_type: str | None = None,
                    sort_order: SortOrder = SortOrder.NONE) -> tuple[str, tuple]:
        """return (statement, params); predicates are ANDed, sort applied last"""
        clauses: list[str] = []
        params: list = []
        if max_price is not None:
            clauses.append("price <= ?")
            params.append(max_price)
        if item_type is not None:
            clauses.append("NORMALIZE(typeOfItem) = ?")
            params.append(normalize(item_type))
        statement = cls.BASE_QUERY
        if clauses:
            statement += " WHERE " + " AND ".join(clauses)
        if sort_order is not SortOrder.NONE:
            statement += f" ORDER BY price {sort_order.value}"
        return statement + ";", tuple(params)

    def list_items(self, max_price: float | None = None, item_type: str | None = None,
                   sort_order: SortOrder = SortOrder.NONE) -> list[Item]:
        """items matching every given predicate; empty list when nothing matches"""
        statement, params = self.build_query(max_price, item_type, sort_order)
        logger.debug("catalog query: %s %s", statement, params)
        return [Item.from_row(r) for r in self.db.query(statement, params)]

    @staticmethod
    def print_items(items: list[Item]):
        """print items as labelled blocks"""
        if not items:
            cprint("no items found", "yellow"); return
        for item in items:
            cprint(f"item: {item.name}", "green", attrs=["bold"])
            print("\tingredients:", item.ingredients)
            print("\ttype of item:", item.type_of_item)
            print("\tprice:", color_money(item.price))
            print("\tdescription:", item.description or "")
            print(SEPARATOR)
