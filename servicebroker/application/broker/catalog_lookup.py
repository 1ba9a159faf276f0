"""
Catalog resolution shared by use cases that need a service definition.
"""

import logging

from servicebroker.domain.broker.entities import ServiceDefinition
from servicebroker.domain.broker.errors import ServiceDefinitionUnknownError
from servicebroker.domain.broker.ports import CatalogService

logger = logging.getLogger(__name__)


def resolve_service_definition(
    catalog_service: CatalogService, service_definition_id: str
) -> ServiceDefinition:
    """Return the catalog entry for ``service_definition_id``.

    Raises:
        ServiceDefinitionUnknownError: If the catalog has no such service.
    """
    definition = catalog_service.get_service_definition(service_definition_id)
    if definition is None:
        logger.warning("Unknown service definition: %s", service_definition_id)
        raise ServiceDefinitionUnknownError(service_definition_id)
    return definition
