"""Storefront FastAPI application.

Initializes the storefront domain once at import so uvicorn workers share it.
PROTEAN_ENV selects the config overlay from ``storefront/domain.toml``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 5003 --reload
"""

from storefront.api.application import create_app
from storefront.domain import storefront

storefront.init()

app = create_app(storefront)
