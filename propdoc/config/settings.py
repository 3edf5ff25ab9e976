import os

# Local SQLite by default, Postgres in production
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./propdoc.db")

# n8n workflow that generates and collects signatures for documents
N8N_BASE_URL = os.getenv("N8N_BASE_URL", "http://localhost:5678/webhook/prop-flow")
N8N_TIMEOUT_SECONDS = float(os.getenv("N8N_TIMEOUT_SECONDS", "10"))
N8N_WEBHOOK_SECRET = os.getenv("N8N_WEBHOOK_SECRET")

JWT_SECRET = os.getenv("JWT_SECRET", "your-secret-key-change-in-production")
TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", "24"))

SEED_DATABASE = os.getenv("SEED_DATABASE", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
