"""
Custom errors for Farm Catalog.

Raised while loading static sources at startup; request handling never raises them.
"""


class FarmCatalogError(Exception):
    """Base error for the catalog server."""
    pass


class CatalogError(FarmCatalogError):
    """Catalog data file missing or malformed."""
    pass


class TemplateError(FarmCatalogError):
    """Template file missing or unreadable."""
    pass
