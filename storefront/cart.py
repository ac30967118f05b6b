"""
Cart Aggregate for Storefront
=============================

A cart holds the lines a customer has picked before checkout. It is owned by
one client session (identified by a key) and persisted through a
``CartStorage`` port on every change, so the same code runs against an
in-process dictionary, a browser-backed store, or anything else that can
save a list of dictionaries.

Line Rules:
-----------
- Adding an item already in the cart increases that line's quantity.
- Setting a quantity of zero or less removes the line.
- No line may hold more than MAX_LINE_QUANTITY units.
- Name and price are what the customer saw when adding; the order service
  re-reads current prices at checkout.

Storage Format:
---------------
Each line is saved as a dictionary with JSON-compatible values (price as a
string) so adapters can serialize it directly.

Usage:
------
    storage = InMemoryCartStorage()
    cart = Cart(storage, key="user-123")
    cart.add_item(CartLine(menu_item_id=4, name="Margherita", price=Decimal("11.50"), quantity=1))
    cart.total_price()   # Decimal("11.50")
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import config
from .schemas.orders import MAX_LINE_QUANTITY, OrderLineIn


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLine:
    menu_item_id: int
    name: str
    price: Decimal
    quantity: int
    notes: Optional[str] = None
    image: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "menu_item_id": self.menu_item_id,
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
            "notes": self.notes,
            "image": self.image,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CartLine":
        return cls(
            menu_item_id=int(data["menu_item_id"]),
            name=str(data["name"]),
            price=Decimal(str(data["price"])),
            quantity=int(data["quantity"]),
            notes=data.get("notes"),
            image=data.get("image"),
        )


# =============================================================================
# Storage Port
# =============================================================================

class CartStorage(ABC):
    """Where a cart's lines live between requests."""

    @abstractmethod
    def load(self, key: str) -> List[Dict[str, Any]]:
        """Return the saved lines for ``key`` (empty when nothing is saved)."""

    @abstractmethod
    def save(self, key: str, lines: List[Dict[str, Any]]) -> None:
        """Replace the saved lines for ``key``."""


class InMemoryCartStorage(CartStorage):
    """
    Process-local storage. Contents are lost on restart.

    Carts untouched for ``max_age`` seconds are dropped, and once
    ``max_carts`` keys are held the least recently saved cart is evicted
    to make room.
    """

    def __init__(
        self,
        max_carts: Optional[int] = None,
        max_age: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._carts: "OrderedDict[str, Tuple[float, List[Dict[str, Any]]]]" = OrderedDict()
        self._lock = threading.Lock()
        self._max_carts = max_carts if max_carts is not None else config.CART_MAX_STORED
        self._max_age = max_age if max_age is not None else config.CART_TTL_SECONDS
        self._clock = clock

    def load(self, key: str) -> List[Dict[str, Any]]:
        with self._lock:
            self._expire()
            entry = self._carts.get(key)
            if entry is None:
                return []
            return [dict(line) for line in entry[1]]

    def save(self, key: str, lines: List[Dict[str, Any]]) -> None:
        with self._lock:
            self._expire()
            if not lines:
                self._carts.pop(key, None)
                return

            self._carts[key] = (self._clock(), [dict(line) for line in lines])
            self._carts.move_to_end(key)
            while len(self._carts) > self._max_carts:
                evicted, _ = self._carts.popitem(last=False)
                logger.info("Evicted cart %s (storage full)", evicted)

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)

    def _expire(self) -> None:
        # Oldest saves sit at the front
        cutoff = self._clock() - self._max_age
        while self._carts:
            key, (saved_at, _) = next(iter(self._carts.items()))
            if saved_at > cutoff:
                break
            del self._carts[key]
            logger.debug("Expired idle cart %s", key)

    def clear(self) -> None:
        with self._lock:
            self._carts.clear()


# =============================================================================
# Cart
# =============================================================================

class Cart:
    """The cart for one session key."""

    def __init__(self, storage: CartStorage, key: str):
        self._storage = storage
        self._key = key
        self._lines: List[CartLine] = [CartLine.from_dict(d) for d in storage.load(key)]

    @property
    def key(self) -> str:
        return self._key

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, menu_item_id: int) -> Optional[CartLine]:
        for line in self._lines:
            if line.menu_item_id == menu_item_id:
                return line
        return None

    def add_item(self, new_line: CartLine) -> None:
        if new_line.quantity <= 0:
            raise ValueError("Quantity must be positive")
        _check_quantity(new_line.quantity)

        existing = self.get_line(new_line.menu_item_id)
        if existing is not None:
            _check_quantity(existing.quantity + new_line.quantity)
            self._lines = [
                replace(line, quantity=line.quantity + new_line.quantity)
                if line.menu_item_id == new_line.menu_item_id else line
                for line in self._lines
            ]
        else:
            self._lines.append(new_line)
        self._save()

    def remove_item(self, menu_item_id: int) -> None:
        self._lines = [line for line in self._lines if line.menu_item_id != menu_item_id]
        self._save()

    def update_quantity(self, menu_item_id: int, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(menu_item_id)
            return
        _check_quantity(quantity)
        self._lines = [
            replace(line, quantity=quantity) if line.menu_item_id == menu_item_id else line
            for line in self._lines
        ]
        self._save()

    def update_notes(self, menu_item_id: int, notes: Optional[str]) -> None:
        self._lines = [
            replace(line, notes=notes) if line.menu_item_id == menu_item_id else line
            for line in self._lines
        ]
        self._save()

    def clear(self) -> None:
        self._lines = []
        self._save()

    def total_price(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def total_items(self) -> int:
        return sum(line.quantity for line in self._lines)

    def to_order_lines(self) -> List[OrderLineIn]:
        """The cart as order lines, in the order they were added."""
        return [
            OrderLineIn(menu_item_id=line.menu_item_id, quantity=line.quantity, notes=line.notes)
            for line in self._lines
        ]

    def _save(self) -> None:
        self._storage.save(self._key, [line.to_dict() for line in self._lines])
        logger.debug("Saved cart %s with %d lines", self._key, len(self._lines))


def _check_quantity(quantity: int) -> None:
    if quantity > MAX_LINE_QUANTITY:
        raise ValueError(f"Quantity may not exceed {MAX_LINE_QUANTITY}")
