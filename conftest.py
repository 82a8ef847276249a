"""Global pytest configuration."""

import os

# Set DATABASE_URL for tests before any imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
# Fixture sources must not sleep in tests
os.environ.setdefault("FETCH_DELAY_MS", "0")
