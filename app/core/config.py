import os
import re
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as "900", "15m", "1h" or "7d".
    A bare number is read as seconds.
    """
    match = re.fullmatch(r"\s*(\d+)\s*([smhd]?)\s*", value or "")
    if not match:
        raise RuntimeError(f"Invalid duration: {value!r}")

    amount = int(match.group(1))
    unit = match.group(2) or "s"
    return {
        "s": timedelta(seconds=amount),
        "m": timedelta(minutes=amount),
        "h": timedelta(hours=amount),
        "d": timedelta(days=amount),
    }[unit]


# JWT configuration
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    raise RuntimeError("JWT_SECRET is not defined in environment variables")

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRES = parse_duration(os.getenv("JWT_EXPIRES_IN", "15m"))

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# Comma separated list, e.g. "http://localhost:8080,https://trips.example.com"
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "http://localhost:8080").split(",")
    if origin.strip()
]

PORT = int(os.getenv("PORT", "3000"))
