# config.py
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent

# ---------------------------
# Gemini
# ---------------------------
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
# OpenAI-compatible endpoint exposed by the Gemini API
GEMINI_BASE_URL = os.getenv("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/openai/")
PLACEHOLDER_API_KEY = "your-api-key-here"

MODEL_TEMPERATURE = 0.2
MODEL_TOP_P = 0.95
MAX_OUTPUT_TOKENS = 2048

# ---------------------------
# Catalog
# ---------------------------
# Defaults ship as package data of `backend`; point these elsewhere for a real catalog
PRODUCTS_PATH = os.getenv("PRODUCTS_PATH", str(BASE_DIR / "backend" / "data" / "products.json"))
USERS_PATH = os.getenv("USERS_PATH", str(BASE_DIR / "backend" / "data" / "users.json"))

# ---------------------------
# Server
# ---------------------------
PORT = int(os.getenv("PORT", "3001"))
HOST = "0.0.0.0"
MAX_AUDIO_BYTES = 10 * 1024 * 1024
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS (single origin or CSV via env; "*" allowed)
_origins_env = os.getenv("FRONTEND_ORIGINS", "*")
ALLOWED_ORIGINS = "*" if _origins_env.strip() == "*" else [o.strip() for o in _origins_env.split(",") if o.strip()]


def api_key_configured(key: str) -> bool:
    return bool(key) and key != PLACEHOLDER_API_KEY
