"""
Core package for the order engine
Contains main business logic and orchestration
"""

from .order_engine import OrderEngine

__all__ = [
    'OrderEngine'
]
