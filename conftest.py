"""Global pytest configuration."""

import os

# Point catalog fetches at a test host before any settings are cached
os.environ.setdefault("CATALOG_BASE_URL", "http://catalog.test/data")
