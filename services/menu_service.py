"""
Menu service - catalog lookups and menu search
"""
from typing import Dict, List, Any, Optional
from difflib import SequenceMatcher
from dataclasses import replace

from models.menu import MenuItem, Restaurant
from database.repository import MenuRepository


class MenuService:
    # Menu/catalog provider consumed by the cart

    def __init__(self, menu_repository: MenuRepository):
        self.menu_repo = menu_repository

    def similarity(self, a: str, b: str) -> float:
        # Similarity score between two strings (0.0 to 1.0)
        return SequenceMatcher(None, a.lower(), b.lower()).ratio()

    def find_menu_items(self, query: str, restaurant_id: Optional[str] = None,
                        limit: int = 5) -> Dict[str, Any]:
        # Available menu items matching the query, best match first
        items = self.menu_repo.find_menu_items(restaurant_id, available_only=True)

        matches = []
        for item in items:
            name_score = self.similarity(query, item.name)
            desc_score = self.similarity(query, item.description or "")
            match_score = max(name_score, desc_score)

            if match_score > 0.3:
                matches.append(replace(item, match_score=round(match_score, 2)))

        matches.sort(key=lambda x: x.match_score, reverse=True)
        matches = matches[:limit]

        return {
            "success": True,
            "matches": [match.to_dict() for match in matches],
            "total_found": len(matches)
        }

    def list_restaurants(self, open_only: bool = False) -> List[Restaurant]:
        return self.menu_repo.list_restaurants(open_only)

    def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        return self.menu_repo.get_restaurant(restaurant_id)

    def get_menu(self, restaurant_id: str, available_only: bool = False) -> List[MenuItem]:
        return self.menu_repo.find_menu_items(restaurant_id, available_only)

    def get_menu_item(self, menu_item_id: str) -> Optional[MenuItem]:
        return self.menu_repo.get_menu_item(menu_item_id)
