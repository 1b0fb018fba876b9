"""Application services."""

from soundhaven.application.services.catalog_service import CATEGORY_SIZES, CatalogService
from soundhaven.application.services.identity_provisioner import IdentityProvisioner

__all__ = [
    "CATEGORY_SIZES",
    "CatalogService",
    "IdentityProvisioner",
]
