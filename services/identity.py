"""
Identity provider - the signed-in user for this client session
"""
import threading
from typing import Optional


class IdentityProvider:
    # Login/OTP flows live elsewhere; this only records who is acting

    def __init__(self, user_id: Optional[str] = None):
        self._user_id = user_id
        self._lock = threading.Lock()

    def sign_in(self, user_id: str):
        if not user_id:
            raise ValueError("user_id is required")
        with self._lock:
            self._user_id = user_id

    def sign_out(self):
        with self._lock:
            self._user_id = None

    def current_user_id(self) -> Optional[str]:
        return self._user_id

