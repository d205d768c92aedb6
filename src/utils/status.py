"""
Order status assignment.

The order endpoint carries no trustworthy status, so the displayed one comes
from a strategy chosen at start-up (see config.ORDER_STATUS_STRATEGY).
"""

import dataclasses
import random
from typing import Callable, List, Optional, Sequence

from api.models import ORDER_STATUSES, Order

StatusStrategy = Callable[[Order], str]


def random_status(rng: Optional[random.Random] = None) -> StatusStrategy:
    """Uniform choice over ORDER_STATUSES. Pass a seeded rng for repeatable runs."""
    rng = rng or random.Random()

    def pick(_order: Order) -> str:
        return rng.choice(ORDER_STATUSES)

    return pick


def constant_status(status: str) -> StatusStrategy:
    if status not in ORDER_STATUSES:
        raise ValueError(f"Unknown order status: {status}")
    return lambda _order: status


def server_status(order: Order) -> str:
    """Keep what the server sent if it is a known status, Pending otherwise."""
    return order.status if order.status in ORDER_STATUSES else ORDER_STATUSES[0]


def get_status_strategy(name: str) -> StatusStrategy:
    """
    Resolve "random", "server" or "constant:<Status>".
    """
    name = (name or "").strip()
    if name == "random":
        return random_status()
    if name == "server":
        return server_status
    if name.startswith("constant:"):
        return constant_status(name.removeprefix("constant:").strip())
    raise ValueError(f"Unknown order status strategy: {name!r}")


def assign_statuses(orders: Sequence[Order], strategy: StatusStrategy) -> List[Order]:
    return [dataclasses.replace(o, status=strategy(o)) for o in orders]
