import random
from typing import Optional

SHORT_CODE_MAX = 999999
SHORT_CODE_DIGITS = 6

# Symbologies the organizer scanner decodes
SCANNABLE_FORMATS = frozenset({"qr_code", "rm_qr_code", "micro_qr_code"})


def generate_short_code() -> int:
    # Coarse human check, not a secret
    return random.randint(0, SHORT_CODE_MAX)


def format_short_code(code: int) -> str:
    return f"{code:06d}"


def parse_scanned_code(raw_value) -> Optional[int]:
    """
    Parse a scanned payload as a base-10 event code.

    Returns None for anything that is not a 1-6 digit non-negative integer,
    so the scanner can ignore it and keep scanning.
    """
    if raw_value is None or isinstance(raw_value, bool):
        return None
    if isinstance(raw_value, int):
        return raw_value if 0 <= raw_value <= SHORT_CODE_MAX else None

    text = str(raw_value).strip()
    if len(text) > SHORT_CODE_DIGITS or not text.isascii() or not text.isdigit():
        return None
    return int(text)
