"""
Bump Bot Keep-alive Server - Configuration

Settings for the HTTP endpoint that keeps free hosting tiers awake.
"""
import os
from dotenv import load_dotenv

# Load .env from the project root
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(ROOT_DIR, '.env'))

# Server settings
HOST = "0.0.0.0"
PORT = int(os.getenv("PORT", 3000))
LOG_LEVEL = os.getenv("KEEPALIVE_LOG_LEVEL", "warning")
