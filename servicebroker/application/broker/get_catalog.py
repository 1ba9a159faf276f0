"""
Use case: Retrieve the broker's service catalog.

Input: None
Output: Catalog
Side effects: None.
Failure cases: None raised by this layer.
"""

import logging

from servicebroker.domain.broker.entities import Catalog
from servicebroker.domain.broker.ports import CatalogService

logger = logging.getLogger(__name__)


class GetCatalogUseCase:
    """Returns the catalog exactly as the CatalogService provides it."""

    def __init__(self, catalog_service: CatalogService) -> None:
        self._catalog_service = catalog_service

    def execute(self) -> Catalog:
        """Run the catalog retrieval use case."""
        logger.debug("Retrieving catalog")
        return self._catalog_service.get_catalog()
