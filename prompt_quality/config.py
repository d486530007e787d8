"""Configuration for the prompt quality engine."""

import os
from dotenv import load_dotenv

# Find the project root (where .env lives)
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
load_dotenv(os.path.join(PROJECT_ROOT, ".env"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

# Cache lifetimes (seconds)
QUESTION_CACHE_TTL = int(os.getenv("QUESTION_CACHE_TTL", "1800"))
OPTIMIZATION_CACHE_TTL = int(os.getenv("OPTIMIZATION_CACHE_TTL", "3600"))
ANALYTICS_CACHE_TTL = int(os.getenv("ANALYTICS_CACHE_TTL", "600"))

# Background sweep of expired cache entries
CACHE_SWEEP_INTERVAL = float(os.getenv("CACHE_SWEEP_INTERVAL", "300"))

# Tokenizer used for the before/after token comparison
TOKEN_ENCODING = os.getenv("TOKEN_ENCODING", "cl100k_base")
