"""
Database package for the order engine
Contains database connection and repository classes
"""

from .connection import DatabaseConnection
from .repository import MenuRepository, DeliveryPersonRepository, StateRepository, MemoryStateRepository

__all__ = [
    'DatabaseConnection',
    'MenuRepository', 'DeliveryPersonRepository', 'StateRepository', 'MemoryStateRepository'
]
