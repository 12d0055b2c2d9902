import os

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
RELOAD = os.getenv("RELOAD", "false").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)

CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# Directory with the browser client, mounted at "/" when set
STATIC_DIR = os.getenv("STATIC_DIR", None)

WS_PATH = os.getenv("WS_PATH", "/ws")

# Peer-to-peer sessions pair exactly two endpoints
ROOM_CAPACITY = 2
