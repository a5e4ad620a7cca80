"""Settings used by the test suite.

Provides the values ``config.settings`` refuses to default, then defers to
it for everything else.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

PRODUCTS_STRICT_DELETE = False
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
LANGUAGE_CODE = "en-us"
