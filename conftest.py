"""Global pytest configuration."""

import os

# Keep tests on the in-memory store regardless of a developer .env
os.environ.setdefault("TRIPBOOK_STORAGE_BACKEND", "memory")
