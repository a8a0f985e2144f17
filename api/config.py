import os
from dotenv import load_dotenv

load_dotenv()

TMDB_API_KEY = os.getenv("TMDB_API_KEY", "")
TMDB_TIMEOUT = float(os.getenv("TMDB_TIMEOUT", "10"))
SOMMELIER_TIMEZONE = os.getenv("SOMMELIER_TIMEZONE", "America/New_York")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
SERVICE_NAME = "AI Movie Sommelier"
SERVICE_VERSION = "2.0.0"
