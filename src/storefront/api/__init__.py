"""Storefront HTTP API package."""

from storefront.api.routes import router

__all__ = ["router"]
