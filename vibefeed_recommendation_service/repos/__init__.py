"""Repository classes"""

from vibefeed_recommendation_service.repos.catalog_repository import CatalogRepository

__all__ = [
    "CatalogRepository",
]
