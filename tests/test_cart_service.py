"""
Tests for cart operations and price aggregation
"""
import unittest

from models.cart import SelectedOption
from support import EngineTestCase, make_menu_item, sized_item


class TestAddToCart(EngineTestCase):

    def test_empty_cart(self):
        self.assertEqual(self.engine.cart, [])
        self.assertIsNone(self.engine.selected_restaurant_id)
        self.assertEqual(self.engine.cart_total, 0)
        self.assertEqual(self.engine.cart_item_count, 0)
        self.assertEqual(self.engine.delivery_fee, 0)

    def test_adds_item_and_selects_restaurant(self):
        item = self.engine.add_to_cart(make_menu_item(price=100), 2)

        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.total_price, 200)
        self.assertEqual(self.engine.selected_restaurant_id, "R1")
        self.assertEqual(self.engine.cart_total, 200)
        self.assertEqual(self.engine.cart_item_count, 2)

    def test_option_prices_multiplied_by_quantity(self):
        item = self.engine.add_to_cart(sized_item(), 3, [
            SelectedOption("size", ("large",)),
            {"option_id": "toppings", "choice_ids": ["cheese", "olives"]},
        ])

        # 3 x (100 + 30 + 10 + 5)
        self.assertEqual(item.total_price, 435)
        self.assertEqual(len(item.selected_options), 2)

    def test_unknown_options_and_choices_add_nothing(self):
        item = self.engine.add_to_cart(sized_item(), 2, [
            {"option_id": "crust", "choice_ids": ["thin"]},
            {"option_id": "toppings", "choice_ids": ["cheese", "pineapple"]},
        ])

        self.assertEqual(item.total_price, 220)

    def test_single_select_option_charges_one_choice(self):
        item = self.engine.add_to_cart(sized_item(), 2, [
            {"option_id": "size", "choice_ids": ["medium", "large", "small"]},
        ])

        # 2 x (100 + 30); "medium" is not on the menu
        self.assertEqual(item.total_price, 260)

    def test_special_instructions_kept(self):
        item = self.engine.add_to_cart(make_menu_item(), 1, special_instructions="No onions")
        self.assertEqual(item.special_instructions, "No onions")

    def test_quantity_below_one_rejected(self):
        with self.assertRaises(ValueError):
            self.engine.add_to_cart(make_menu_item(), 0)
        self.assertEqual(self.engine.cart, [])

    def test_ids_are_unique(self):
        ids = {self.engine.add_to_cart(make_menu_item(), 1).id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_switching_restaurant_clears_cart(self):
        self.engine.add_to_cart(make_menu_item("a", "R1", 100), 2)
        self.assertEqual(self.engine.cart_total, 200)

        r2_item = self.engine.add_to_cart(make_menu_item("b", "R2", 80), 1)

        self.assertEqual([item.id for item in self.engine.cart], [r2_item.id])
        self.assertEqual(self.engine.selected_restaurant_id, "R2")
        self.assertEqual(self.engine.cart_total, 80)

    def test_cart_stays_scoped_to_one_restaurant(self):
        for restaurant_id in ["R1", "R1", "R2", "R3", "R3", "R1", "R1"]:
            self.engine.add_to_cart(make_menu_item(restaurant_id=restaurant_id), 1)

            restaurants = {item.menu_item.restaurant_id for item in self.engine.cart}
            self.assertEqual(restaurants, {self.engine.selected_restaurant_id})

        self.assertEqual(len(self.engine.cart), 2)


class TestCartEdits(EngineTestCase):

    def test_remove_last_item_resets_restaurant(self):
        item = self.engine.add_to_cart(make_menu_item(), 1)
        self.engine.remove_from_cart(item.id)

        self.assertEqual(self.engine.cart, [])
        self.assertIsNone(self.engine.selected_restaurant_id)

    def test_remove_keeps_restaurant_while_items_remain(self):
        first = self.engine.add_to_cart(make_menu_item("a"), 1)
        self.engine.add_to_cart(make_menu_item("b"), 1)
        self.engine.remove_from_cart(first.id)

        self.assertEqual(len(self.engine.cart), 1)
        self.assertEqual(self.engine.selected_restaurant_id, "R1")

    def test_remove_unknown_id_is_noop(self):
        item = self.engine.add_to_cart(make_menu_item(), 1)
        self.engine.remove_from_cart("missing")

        self.assertEqual([i.id for i in self.engine.cart], [item.id])
        self.assertEqual(self.engine.selected_restaurant_id, "R1")

    def test_update_quantity_keeps_unit_price(self):
        item = self.engine.add_to_cart(make_menu_item(price=100), 2)
        updated = self.engine.update_cart_item_quantity(item.id, 3)

        self.assertEqual(updated.quantity, 3)
        self.assertEqual(updated.total_price, 300)
        self.assertEqual(self.engine.cart[0].total_price, 300)

    def test_update_quantity_keeps_option_deltas(self):
        item = self.engine.add_to_cart(sized_item(), 2, [{"option_id": "size", "choice_ids": ["large"]}])
        updated = self.engine.update_cart_item_quantity(item.id, 5)

        self.assertAlmostEqual(updated.total_price / updated.quantity, item.total_price / item.quantity)
        self.assertEqual(updated.total_price, 650)

    def test_update_does_not_touch_original_record(self):
        item = self.engine.add_to_cart(make_menu_item(price=100), 2)
        self.engine.update_cart_item_quantity(item.id, 4)

        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.total_price, 200)

    def test_update_to_zero_removes(self):
        item = self.engine.add_to_cart(make_menu_item(), 2)
        self.assertIsNone(self.engine.update_cart_item_quantity(item.id, 0))

        self.assertEqual(self.engine.cart, [])
        self.assertIsNone(self.engine.selected_restaurant_id)

    def test_update_unknown_id_returns_none(self):
        self.engine.add_to_cart(make_menu_item(), 2)
        self.assertIsNone(self.engine.update_cart_item_quantity("missing", 4))
        self.assertEqual(self.engine.cart_item_count, 2)

    def test_clear_cart(self):
        self.engine.add_to_cart(make_menu_item("a"), 1)
        self.engine.add_to_cart(make_menu_item("b"), 1)
        self.engine.clear_cart()

        self.assertEqual(self.engine.cart, [])
        self.assertIsNone(self.engine.selected_restaurant_id)


class TestCartPricing(EngineTestCase):

    def test_totals_with_default_delivery_fee(self):
        self.engine.add_to_cart(make_menu_item(price=100), 2)

        self.assertEqual(self.engine.cart_total, 200)
        self.assertEqual(self.engine.delivery_fee, 50)
        self.assertEqual(self.engine.tax_amount, 20)
        self.assertEqual(self.engine.order_total, 270)

    def test_restaurant_delivery_fee_from_catalog(self):
        kitfo = self.engine.get_menu_item("menu-item-3")
        self.engine.add_to_cart(kitfo, 1)

        self.assertEqual(self.engine.delivery_fee, 60)
        self.assertEqual(self.engine.order_total, 200 + 60 + 20)

    def test_tax_rounds_half_up(self):
        self.engine.add_to_cart(make_menu_item(price=25), 1)
        self.assertEqual(self.engine.tax_amount, 3)

        self.engine.clear_cart()
        self.engine.add_to_cart(make_menu_item(price=24), 1)
        self.assertEqual(self.engine.tax_amount, 2)

    def test_summary(self):
        self.engine.add_to_cart(make_menu_item("a", price=100), 2)
        self.engine.add_to_cart(make_menu_item("b", price=55), 1)
        summary = self.engine.get_cart_summary()

        self.assertEqual(summary.restaurant_id, "R1")
        self.assertEqual(summary.total_items, 2)
        self.assertEqual(summary.item_count, 3)
        self.assertEqual(summary.subtotal, 255)
        self.assertEqual(summary.tax, 26)
        self.assertEqual(summary.total_amount, 255 + 50 + 26)


if __name__ == '__main__':
    unittest.main()
