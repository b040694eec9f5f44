"""
Runtime settings loaded from the environment (.env supported)
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    db_path: str = "orders.db"
    tax_rate: float = 0.10
    default_delivery_fee: float = 50
    estimated_delivery_minutes: int = 45
    # Seconds before the first simulated status change, then a random delay per step
    status_initial_delay: float = 10.0
    status_min_delay: float = 30.0
    status_max_delay: float = 120.0
    payment_delay: float = 2.0
    secret_key: str = "your-secret-key-here"
    port: int = 5000
    debug: bool = False

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()

        return cls(
            db_path=os.getenv('ORDER_DB_PATH', cls.db_path),
            tax_rate=float(os.getenv('TAX_RATE', cls.tax_rate)),
            default_delivery_fee=float(os.getenv('DEFAULT_DELIVERY_FEE', cls.default_delivery_fee)),
            estimated_delivery_minutes=int(os.getenv('ESTIMATED_DELIVERY_MINUTES', cls.estimated_delivery_minutes)),
            status_initial_delay=float(os.getenv('STATUS_INITIAL_DELAY', cls.status_initial_delay)),
            status_min_delay=float(os.getenv('STATUS_MIN_DELAY', cls.status_min_delay)),
            status_max_delay=float(os.getenv('STATUS_MAX_DELAY', cls.status_max_delay)),
            payment_delay=float(os.getenv('PAYMENT_DELAY', cls.payment_delay)),
            secret_key=os.getenv('SECRET_KEY', cls.secret_key),
            port=int(os.getenv('PORT', cls.port)),
            debug=os.getenv('DEBUG', 'False').lower() == 'true'
        )
