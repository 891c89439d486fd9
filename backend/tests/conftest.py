"""Root conftest - shared test configuration."""

import os

# Tests never reach the real dictionary provider or a file database
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DICTIONARY_API_BASE_URL", "https://dictionary.test/api/v2/entries/en")
os.environ.setdefault("LOG_FORMAT", "text")
