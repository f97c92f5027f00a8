# helpers/normalize.py
import random
import string
import time

ID_ALPHABET = string.digits + string.ascii_lowercase

# incoming payload key -> canonical field name
FIELD_ALIASES = {
    "startDate": "start_date",
    "autoRenew": "auto_renew",
}


def _base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(ID_ALPHABET[rem])
    return "".join(reversed(digits))


def new_subscription_id() -> str:
    """Return an id shaped like ``sub_<epoch ms base36>_<6 random chars>``."""
    suffix = "".join(random.choice(ID_ALPHABET) for _ in range(6))
    return f"sub_{_base36(int(time.time() * 1000))}_{suffix}"


def normalize_payload(payload: dict) -> dict:
    """
    Convert a raw subscription payload into canonical field names and
    trimmed values. No validation happens here.
    """
    normalized = {}
    for key, value in (payload or {}).items():
        normalized[FIELD_ALIASES.get(key, key)] = value

    if isinstance(normalized.get("name"), str):
        normalized["name"] = normalized["name"].strip()
    if isinstance(normalized.get("frequency"), str):
        normalized["frequency"] = normalized["frequency"].strip().lower()
    if isinstance(normalized.get("start_date"), str):
        normalized["start_date"] = normalized["start_date"].strip()

    normalized.setdefault("enabled", True)
    normalized.setdefault("auto_renew", True)
    return normalized
