"""Catalog readers"""

from .reader import CatalogReader, CatalogUnavailableError, QuestionnaireReader
from .memory import InMemoryCatalog
from .json_reader import JsonCatalogReader
from .cached import CachedCatalogReader

__all__ = [
    "CatalogReader",
    "CatalogUnavailableError",
    "QuestionnaireReader",
    "InMemoryCatalog",
    "JsonCatalogReader",
    "CachedCatalogReader",
]
