from dotenv import load_dotenv
import os

load_dotenv()

ANTHROPIC_API_KEY = os.environ.get("ANTHROPIC_API_KEY")
ANTHROPIC_MODEL = os.environ.get("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
ANTHROPIC_URL = os.environ.get("ANTHROPIC_URL", "https://api.anthropic.com/v1/messages")
ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_TIMEOUT = float(os.environ.get("ANTHROPIC_TIMEOUT", "60"))
MAX_TOKENS = 1024

# admin endpoints reject every request while this is unset
ADMIN_TOKEN = os.environ.get("ADMIN_TOKEN")

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///cerebro.db")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get(
        "CORS_ORIGINS", "https://cerebrounited.netlify.app,http://localhost:3000"
    ).split(",")
    if origin.strip()
]

GRAPHITE_HOST = os.environ.get("GRAPHITE_HOST", "localhost")
GRAPHITE_HOST_PORT = int(os.environ.get("GRAPHITE_HOST_PORT", "8125"))
METRICS_PREFIX = os.environ.get("METRICS_PREFIX", "cerebro")

PORT = int(os.environ.get("PORT", "3000"))
PUBLIC_DIR = os.environ.get("PUBLIC_DIR", "public")
MAX_BODY_BYTES = 2 * 1024 * 1024
