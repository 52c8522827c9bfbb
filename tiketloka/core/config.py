import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# Payment page countdown (seconds). Display only, never cancels an order.
PAYMENT_COUNTDOWN_SECONDS = int(os.getenv("TIKETLOKA_PAYMENT_COUNTDOWN_SECONDS", "900"))
COUNTDOWN_INTERVAL = float(os.getenv("TIKETLOKA_COUNTDOWN_INTERVAL", "1.0"))

# Logging
LOG_DIR = os.getenv("TIKETLOKA_LOG_DIR", "logs")
LOG_TO_FILES = _env_bool("TIKETLOKA_LOG_TO_FILES", True)
LOG_LEVEL = os.getenv("TIKETLOKA_LOG_LEVEL", "INFO")

# Order / ticket codes
BOOKING_CODE_LENGTH = int(os.getenv("TIKETLOKA_BOOKING_CODE_LENGTH", "8"))
TICKET_SUFFIX_LENGTH = int(os.getenv("TIKETLOKA_TICKET_SUFFIX_LENGTH", "6"))
QR_PREFIX = os.getenv("TIKETLOKA_QR_PREFIX", "TIKETLOKA")
