"""
Shared fixtures for the order engine tests
"""
import heapq
import itertools
import os
import random
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Tuple

from config import Settings
from core.order_engine import OrderEngine
from database.connection import DatabaseConnection
from init_db import seed_database
from models.menu import Location, MenuItem, MenuItemOption, MenuItemOptionChoice
from services.identity import IdentityProvider
from services.scheduler import ScheduledCall

HOME = Location(9.0100, 38.7600, "Kazanchis, Addis Ababa")


class StepClock:
    """Clock that moves one second forward on every reading"""

    def __init__(self):
        self.current = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current += timedelta(seconds=1)
        return self.current


class StubGateway:
    """Payment gateway double recording every charge"""

    def __init__(self, result=True, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def process_payment(self, amount, payment_method_id):
        self.calls.append((amount, payment_method_id))
        if self.error is not None:
            raise self.error
        return self.result


class ManualScheduler:
    """Virtual-time scheduler for deterministic tests.

    Nothing runs until ``advance`` (or ``run_all``) moves the clock past a
    callback's deadline. Callbacks scheduled while advancing are honoured in
    the same call if they fall due within the advanced window.
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._sequence = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now + delay, callback)
        heapq.heappush(self._queue, (call.deadline, next(self._sequence), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    @property
    def delays(self) -> List[float]:
        """Remaining delay of every pending callback, soonest first."""
        return [deadline - self.now for deadline, _, call in sorted(self._queue) if not call.cancelled]

    def advance(self, seconds: float) -> int:
        target = self.now + seconds
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            deadline, _, call = heapq.heappop(self._queue)
            self.now = deadline
            if call.cancelled:
                continue
            call.callback()
            fired += 1

        self.now = target
        return fired

    def run_next(self) -> bool:
        while self._queue:
            deadline, _, call = heapq.heappop(self._queue)
            self.now = max(self.now, deadline)
            if call.cancelled:
                continue
            call.callback()
            return True
        return False

    def run_all(self, limit: int = 1000) -> int:
        fired = 0
        while fired < limit and self.run_next():
            fired += 1
        return fired


def make_menu_item(item_id="item-1", restaurant_id="R1", price=100, options=()):
    return MenuItem(id=item_id, restaurant_id=restaurant_id, name=item_id, price=price, options=options)


def sized_item(restaurant_id="R1"):
    """Menu item priced 100 with a size option and a multi-select toppings option"""
    return make_menu_item(
        item_id="pizza",
        restaurant_id=restaurant_id,
        price=100,
        options=(
            MenuItemOption(
                id="size",
                name="Size",
                choices=(
                    MenuItemOptionChoice("small", "Small", 0),
                    MenuItemOptionChoice("large", "Large", 30),
                ),
                required=True
            ),
            MenuItemOption(
                id="toppings",
                name="Toppings",
                choices=(
                    MenuItemOptionChoice("cheese", "Cheese", 10),
                    MenuItemOptionChoice("olives", "Olives", 5),
                ),
                multi_select=True
            ),
        )
    )


class EngineTestCase(unittest.TestCase):
    """Builds a seeded engine on a temporary database with virtual time"""

    user_id = "user1"
    seed = True

    def setUp(self):
        self.test_db = tempfile.NamedTemporaryFile(delete=False, suffix='.db')
        self.test_db.close()
        self.settings = Settings(db_path=self.test_db.name, payment_delay=0)

        if self.seed:
            seed_database(DatabaseConnection(self.test_db.name))

        self.gateway = StubGateway()
        self.scheduler = ManualScheduler()
        self.clock = StepClock()
        self.engine = self.build_engine()

    def build_engine(self, **overrides):
        options = dict(
            settings=self.settings,
            identity=IdentityProvider(self.user_id),
            payment_gateway=self.gateway,
            scheduler=self.scheduler,
            rng=random.Random(7),
            clock=self.clock
        )
        options.update(overrides)
        return OrderEngine(**options)

    def tearDown(self):
        os.unlink(self.test_db.name)

    def place_order(self, tip=None, item=None, quantity=2):
        self.engine.add_to_cart(item or make_menu_item(), quantity)
        return self.engine.create_order(HOME, "credit_card", tip=tip)
