"""Root conftest — shared test configuration."""

import os

# Deterministic settings; never point tests at a real database or secret
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-sweetshop-tests-only")
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("LOG_FORMAT", "text")
