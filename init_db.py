#!/usr/bin/env python3
"""
Database initialization script
Creates the schema and loads the sample restaurants, menus and delivery roster.
"""
from config import Settings
from database.connection import DatabaseConnection
from database.repository import MenuRepository, DeliveryPersonRepository
from models.menu import (
    Location, Restaurant, MenuItem, MenuItemOption, MenuItemOptionChoice, DeliveryPerson
)

SAMPLE_RESTAURANTS = [
    Restaurant(
        id="restaurant1",
        name="Habesha Restaurant",
        description="Traditional Ethiopian dishes served with fresh injera.",
        cuisine_type=("Ethiopian", "Traditional"),
        delivery_fee=50,
        min_order_amount=200,
        estimated_delivery_time=45,
        rating=4.7,
        location=Location(9.0222, 38.7468, "Bole, Addis Ababa")
    ),
    Restaurant(
        id="restaurant2",
        name="Addis Kitfo House",
        description="Kitfo, tibs and tej in the heart of Piassa.",
        cuisine_type=("Ethiopian", "Grill"),
        delivery_fee=60,
        min_order_amount=150,
        estimated_delivery_time=35,
        rating=4.5,
        location=Location(9.0350, 38.7520, "Piassa, Addis Ababa")
    ),
]

SPICE_LEVEL = MenuItemOption(
    id="spice",
    name="Spice level",
    choices=(
        MenuItemOptionChoice("mild", "Mild", 0),
        MenuItemOptionChoice("hot", "Hot", 0),
        MenuItemOptionChoice("extra-hot", "Extra hot", 10),
    ),
    required=True
)

SAMPLE_MENU_ITEMS = [
    MenuItem(
        id="menu-item-1",
        restaurant_id="restaurant1",
        name="Doro Wat",
        description="Spicy chicken stew with boiled egg",
        price=150,
        category="Main",
        is_popular=True,
        options=(
            SPICE_LEVEL,
            MenuItemOption(
                id="extras",
                name="Extras",
                choices=(
                    MenuItemOptionChoice("extra-egg", "Extra egg", 15),
                    MenuItemOptionChoice("extra-injera", "Extra injera", 20),
                    MenuItemOptionChoice("ayib", "Ayib", 25),
                ),
                multi_select=True
            ),
        )
    ),
    MenuItem(
        id="menu-item-2",
        restaurant_id="restaurant1",
        name="Injera",
        description="Teff flatbread",
        price=20,
        category="Sides"
    ),
    MenuItem(
        id="menu-item-5",
        restaurant_id="restaurant1",
        name="Shiro",
        description="Chickpea stew",
        price=90,
        category="Main",
        options=(SPICE_LEVEL,)
    ),
    MenuItem(
        id="menu-item-3",
        restaurant_id="restaurant2",
        name="Kitfo",
        description="Minced beef seasoned with mitmita and kibbeh",
        price=200,
        category="Main",
        is_popular=True,
        options=(
            MenuItemOption(
                id="doneness",
                name="Doneness",
                choices=(
                    MenuItemOptionChoice("raw", "Tere", 0),
                    MenuItemOptionChoice("leb-leb", "Leb leb", 0),
                    MenuItemOptionChoice("cooked", "Fully cooked", 0),
                ),
                required=True
            ),
        )
    ),
    MenuItem(
        id="menu-item-4",
        restaurant_id="restaurant2",
        name="Special Tibs",
        description="Sauteed beef with rosemary and peppers",
        price=180,
        category="Main"
    ),
]

SAMPLE_DELIVERY_PEOPLE = [
    DeliveryPerson(
        id="delivery-person-1",
        name="John Doe",
        phone="+251911000001",
        avatar="https://randomuser.me/api/portraits/men/1.jpg",
        current_location=Location(9.0200, 38.7450),
        rating=4.8,
        completed_deliveries=120
    ),
    DeliveryPerson(
        id="delivery-person-2",
        name="Meron Alemu",
        phone="+251911000002",
        current_location=Location(9.0300, 38.7600),
        rating=4.6,
        completed_deliveries=87
    ),
]


def seed_database(db_connection: DatabaseConnection) -> bool:
    """Load the sample catalog and roster into an initialized database"""
    menu_repo = MenuRepository(db_connection)
    delivery_repo = DeliveryPersonRepository(db_connection)

    ok = all(menu_repo.add_restaurant(r) for r in SAMPLE_RESTAURANTS)
    ok = all(menu_repo.add_menu_item(m) for m in SAMPLE_MENU_ITEMS) and ok
    ok = all(delivery_repo.add_delivery_person(p) for p in SAMPLE_DELIVERY_PEOPLE) and ok
    return ok


def init_database(db_path: str) -> bool:
    """Initialize database with the sample data"""
    db_connection = DatabaseConnection(db_path)

    if not seed_database(db_connection):
        print("Database initialization failed, see log for details.")
        return False

    print("Database initialized!")

    menu_repo = MenuRepository(db_connection)
    delivery_repo = DeliveryPersonRepository(db_connection)
    print(f"Restaurants: {len(menu_repo.list_restaurants())}")
    print(f"Menu items: {len(menu_repo.find_menu_items())}")
    print(f"Delivery people: {len(delivery_repo.list_delivery_people())}")

    return True


if __name__ == "__main__":
    settings = Settings.from_env()
    print("=== Order engine database initialization ===")
    if init_database(settings.db_path):
        print("\nYou can now start the server with app.py")
    else:
        print("\nInitialization failed.")
