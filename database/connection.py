"""
Database connection management
"""
import sqlite3
from contextlib import contextmanager
from typing import Generator


class DatabaseConnection:
    # Owns the SQLite file path and creates the schema on first use

    def __init__(self, db_path: str = "orders.db"):
        self.db_path = db_path
        self.init_database()

    def init_database(self):
        # Create catalog, roster and state tables if missing
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Restaurants (
                restaurant_id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                description TEXT,
                cuisine_type TEXT,
                delivery_fee REAL NOT NULL DEFAULT 0,
                min_order_amount REAL NOT NULL DEFAULT 0,
                estimated_delivery_time INTEGER,
                is_open INTEGER NOT NULL DEFAULT 1,
                rating REAL NOT NULL DEFAULT 0,
                latitude REAL,
                longitude REAL,
                address TEXT
            )
            ''')

            # Option groups are stored as JSON, like cart modifications
            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Menu_Items (
                menu_item_id TEXT PRIMARY KEY,
                restaurant_id TEXT NOT NULL,
                name TEXT NOT NULL,
                description TEXT,
                price REAL NOT NULL,
                category TEXT,
                is_available INTEGER NOT NULL DEFAULT 1,
                is_popular INTEGER NOT NULL DEFAULT 0,
                options TEXT,
                FOREIGN KEY(restaurant_id) REFERENCES Restaurants(restaurant_id)
            )
            ''')

            # Insertion order (rowid) defines roster priority
            cursor.execute('''
            CREATE TABLE IF NOT EXISTS Delivery_People (
                delivery_person_id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                phone TEXT,
                avatar TEXT,
                latitude REAL,
                longitude REAL,
                is_available INTEGER NOT NULL DEFAULT 1,
                rating REAL NOT NULL DEFAULT 0,
                completed_deliveries INTEGER NOT NULL DEFAULT 0
            )
            ''')

            cursor.execute('''
            CREATE TABLE IF NOT EXISTS App_State (
                state_key TEXT PRIMARY KEY,
                state_value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            ''')

            conn.commit()

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        # One short-lived connection per unit of work
        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()
