"""
Adapter: Catalog loaded from configuration.

Implements CatalogService port.
Reads the catalog once from a JSON document and serves it unchanged.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from servicebroker.domain.broker.entities import Catalog, ServiceDefinition
from servicebroker.domain.broker.ports import CatalogService

logger = logging.getLogger(__name__)

_CATALOG_ADAPTER = TypeAdapter(Catalog)


class ConfiguredCatalogService(CatalogService):
    """Serves a fixed catalog supplied at construction time."""

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog
        self._by_id = {service.id: service for service in catalog.services}

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ConfiguredCatalogService":
        """Build the adapter from an OSB catalog JSON document.

        Raises:
            pydantic.ValidationError: If the document is not a valid catalog.
        """
        return cls(_CATALOG_ADAPTER.validate_json(raw))

    @classmethod
    def from_file(cls, path: Optional[str]) -> "ConfiguredCatalogService":
        """Build the adapter from a catalog file, or an empty catalog if unset.

        Args:
            path: Location of the JSON catalog, usually ``settings.catalog_path``.
        """
        if not path:
            logger.warning("No catalog configured; serving an empty catalog")
            return cls(Catalog())
        try:
            service = cls.from_json(Path(path).read_bytes())
        except (OSError, ValidationError):
            logger.error("Failed to load catalog from %s", path, exc_info=True)
            raise
        logger.info("Loaded catalog from %s (%d services)", path, len(service._by_id))
        return service

    def get_catalog(self) -> Catalog:
        return self._catalog

    def get_service_definition(self, service_id: str) -> Optional[ServiceDefinition]:
        return self._by_id.get(service_id)
