# HORECA/backend/horeca/services/validation.py : input sanitizing and validation

import re
import threading
import time
from typing import Dict, List, Tuple

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_REGEX = re.compile(r"^\+?[\d\s\-\(\)]{10,15}$")

def sanitize_input(value: str) -> str:
    """Strip markup that could end up rendered in the frontend"""
    if not value:
        return ""
    value = re.sub(r"[<>]", "", value)
    value = re.sub(r"javascript:", "", value, flags=re.IGNORECASE)
    value = re.sub(r"on\w+=", "", value, flags=re.IGNORECASE)
    return value.strip()

def validate_email(email: str) -> bool:
    return bool(EMAIL_REGEX.match(email)) and len(email) <= 254

def validate_password(password: str) -> Tuple[bool, List[str]]:
    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if len(password) > 128:
        errors.append("Password must not exceed 128 characters")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")
    return len(errors) == 0, errors

def validate_phone_number(phone: str) -> bool:
    return isinstance(phone, str) and bool(PHONE_REGEX.match(phone))

def validate_cafe_name(name: str) -> bool:
    return 2 <= len(sanitize_input(name)) <= 100

def validate_owner_name(name: str) -> bool:
    return 2 <= len(sanitize_input(name)) <= 50

def validate_number(value, min_value: int = 0, max_value: int = 1000) -> bool:
    return value is not None and min_value <= value <= max_value

class RateLimiter:
    """
    Fixed-window limiter keyed by an identifier (login email, IP...).
    `hit` returns False once `max_attempts` were used inside the window.
    At most `max_tracked` identifiers are kept: expired windows are dropped
    first, then the oldest ones.
    """

    def __init__(self, max_attempts: int, window_seconds: float, max_tracked: int = 10000):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self.max_tracked = max_tracked
        self._attempts: Dict[str, Dict[str, float]] = {}
        self._lock = threading.Lock()

    def hit(self, identifier: str) -> bool:
        now = time.monotonic()
        with self._lock:
            record = self._attempts.get(identifier)
            if not record or now > record["reset_time"]:
                self._attempts.pop(identifier, None)
                self._make_room(now)
                self._attempts[identifier] = {"count": 1, "reset_time": now + self.window_seconds}
                return True
            if record["count"] >= self.max_attempts:
                return False
            record["count"] += 1
            return True

    def _make_room(self, now: float):
        if len(self._attempts) < self.max_tracked:
            return
        for key in [k for k, r in self._attempts.items() if now > r["reset_time"]]:
            del self._attempts[key]
        # Insertion order is window start order
        while len(self._attempts) >= self.max_tracked:
            del self._attempts[next(iter(self._attempts))]

    def is_limited(self, identifier: str) -> bool:
        """True while the identifier has used up its window, without counting a hit"""
        now = time.monotonic()
        with self._lock:
            record = self._attempts.get(identifier)
            return bool(record) and now <= record["reset_time"] and record["count"] >= self.max_attempts

    def reset(self, identifier: str):
        with self._lock:
            self._attempts.pop(identifier, None)
