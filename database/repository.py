"""
Database repository classes
"""
import sqlite3
import json
import logging
from typing import List, Optional, Dict, Any
from models.menu import Location, MenuItem, MenuItemOption, Restaurant, DeliveryPerson
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


class MenuRepository:
    # Restaurant and menu catalog access

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def add_restaurant(self, restaurant: Restaurant) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            try:
                location = restaurant.location
                cursor.execute("""
                INSERT OR REPLACE INTO Restaurants (
                    restaurant_id, name, description, cuisine_type, delivery_fee,
                    min_order_amount, estimated_delivery_time, is_open, rating,
                    latitude, longitude, address
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    restaurant.id, restaurant.name, restaurant.description,
                    json.dumps(list(restaurant.cuisine_type)), restaurant.delivery_fee,
                    restaurant.min_order_amount, restaurant.estimated_delivery_time,
                    int(restaurant.is_open), restaurant.rating,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    location.address if location else None
                ))

                conn.commit()
                return True
            except sqlite3.Error:
                logger.exception("Failed to save restaurant %s", restaurant.id)
                return False

    def add_menu_item(self, menu_item: MenuItem) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            try:
                cursor.execute("""
                INSERT OR REPLACE INTO Menu_Items (
                    menu_item_id, restaurant_id, name, description, price,
                    category, is_available, is_popular, options
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    menu_item.id, menu_item.restaurant_id, menu_item.name,
                    menu_item.description, menu_item.price, menu_item.category,
                    int(menu_item.is_available), int(menu_item.is_popular),
                    json.dumps([option.to_dict() for option in menu_item.options])
                ))

                conn.commit()
                return True
            except sqlite3.Error:
                logger.exception("Failed to save menu item %s", menu_item.id)
                return False

    def list_restaurants(self, open_only: bool = False) -> List[Restaurant]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            sql = """
            SELECT restaurant_id, name, description, cuisine_type, delivery_fee,
                   min_order_amount, estimated_delivery_time, is_open, rating,
                   latitude, longitude, address
            FROM Restaurants
            """
            if open_only:
                sql += " WHERE is_open = 1"
            sql += " ORDER BY rowid"

            cursor.execute(sql)
            return [self._row_to_restaurant(row) for row in cursor.fetchall()]

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
            SELECT restaurant_id, name, description, cuisine_type, delivery_fee,
                   min_order_amount, estimated_delivery_time, is_open, rating,
                   latitude, longitude, address
            FROM Restaurants WHERE restaurant_id = ?
            """, (restaurant_id,))

            result = cursor.fetchone()
            return self._row_to_restaurant(result) if result else None

    def find_menu_items(self, restaurant_id: Optional[str] = None,
                        available_only: bool = False) -> List[MenuItem]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            sql = """
            SELECT menu_item_id, restaurant_id, name, description, price,
                   category, is_available, is_popular, options
            FROM Menu_Items
            WHERE 1 = 1
            """
            params = []

            if restaurant_id:
                sql += " AND restaurant_id = ?"
                params.append(restaurant_id)
            if available_only:
                sql += " AND is_available = 1"
            sql += " ORDER BY rowid"

            cursor.execute(sql, params)
            return [self._row_to_menu_item(row) for row in cursor.fetchall()]

    def get_menu_item(self, menu_item_id: str) -> Optional[MenuItem]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
            SELECT menu_item_id, restaurant_id, name, description, price,
                   category, is_available, is_popular, options
            FROM Menu_Items WHERE menu_item_id = ?
            """, (menu_item_id,))

            result = cursor.fetchone()
            return self._row_to_menu_item(result) if result else None

    @staticmethod
    def _row_to_restaurant(row) -> Restaurant:
        location = None
        if row[9] is not None and row[10] is not None:
            location = Location(latitude=row[9], longitude=row[10], address=row[11])

        return Restaurant(
            id=row[0],
            name=row[1],
            description=row[2] or "",
            cuisine_type=tuple(json.loads(row[3])) if row[3] else (),
            delivery_fee=row[4],
            min_order_amount=row[5],
            estimated_delivery_time=row[6],
            is_open=bool(row[7]),
            rating=row[8],
            location=location
        )

    @staticmethod
    def _row_to_menu_item(row) -> MenuItem:
        options = json.loads(row[8]) if row[8] else []

        return MenuItem(
            id=row[0],
            restaurant_id=row[1],
            name=row[2],
            description=row[3] or "",
            price=row[4],
            category=row[5] or "",
            is_available=bool(row[6]),
            is_popular=bool(row[7]),
            options=tuple(MenuItemOption.from_dict(option) for option in options)
        )


class DeliveryPersonRepository:
    # Delivery roster access

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def add_delivery_person(self, person: DeliveryPerson) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            try:
                location = person.current_location
                cursor.execute("""
                INSERT OR REPLACE INTO Delivery_People (
                    delivery_person_id, name, phone, avatar, latitude, longitude,
                    is_available, rating, completed_deliveries
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    person.id, person.name, person.phone, person.avatar,
                    location.latitude if location else None,
                    location.longitude if location else None,
                    int(person.is_available), person.rating, person.completed_deliveries
                ))

                conn.commit()
                return True
            except sqlite3.Error:
                logger.exception("Failed to save delivery person %s", person.id)
                return False

    def set_availability(self, delivery_person_id: str, is_available: bool) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
            UPDATE Delivery_People SET is_available = ?
            WHERE delivery_person_id = ?
            """, (int(is_available), delivery_person_id))

            conn.commit()
            return cursor.rowcount > 0

    def list_delivery_people(self) -> List[DeliveryPerson]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
            SELECT delivery_person_id, name, phone, avatar, latitude, longitude,
                   is_available, rating, completed_deliveries
            FROM Delivery_People
            ORDER BY rowid
            """)

            people = []
            for row in cursor.fetchall():
                location = None
                if row[4] is not None and row[5] is not None:
                    location = Location(latitude=row[4], longitude=row[5])

                people.append(DeliveryPerson(
                    id=row[0],
                    name=row[1],
                    phone=row[2] or "",
                    avatar=row[3],
                    current_location=location,
                    is_available=bool(row[6]),
                    rating=row[7],
                    completed_deliveries=row[8]
                ))

            return people


class StateRepository:
    # Namespaced key-value storage for serialized session state

    def __init__(self, db_connection: DatabaseConnection):
        self.db = db_connection

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("SELECT state_value FROM App_State WHERE state_key = ?", (key,))
            result = cursor.fetchone()
            return json.loads(result[0]) if result else None

    def save(self, key: str, value: Dict[str, Any]) -> bool:
        with self.db.get_connection() as conn:
            cursor = conn.cursor()

            try:
                cursor.execute("""
                INSERT INTO App_State (state_key, state_value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(state_key) DO UPDATE SET
                    state_value = excluded.state_value,
                    updated_at = excluded.updated_at
                """, (key, json.dumps(value)))

                conn.commit()
                return True
            except sqlite3.Error:
                logger.exception("Failed to persist state under %s", key)
                return False


class MemoryStateRepository:
    # Same contract as StateRepository, kept in process memory

    def __init__(self):
        self._values: Dict[str, str] = {}

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        raw = self._values.get(key)
        return json.loads(raw) if raw is not None else None

    def save(self, key: str, value: Dict[str, Any]) -> bool:
        self._values[key] = json.dumps(value)
        return True
