"""
Process-local state shared by the in-memory broker adapters.

Holds provisioned instances and their bindings. Nothing here survives
a restart. All access goes through ``lock``.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from servicebroker.domain.broker.entities import (
    CreateServiceInstanceBindingResponse,
    PlatformContext,
)


@dataclass
class StoredInstance:
    """A provisioned service instance."""

    service_instance_id: str
    service_definition_id: str
    plan_id: str
    organization_guid: Optional[str]
    space_guid: Optional[str]
    parameters: Mapping[str, Any]
    context: Optional[PlatformContext] = None


@dataclass
class StoredBinding:
    """A binding together with the request attributes it was created from."""

    service_instance_id: str
    binding_id: str
    service_definition_id: str
    plan_id: str
    app_guid: Optional[str]
    bind_resource: Mapping[str, Any]
    parameters: Mapping[str, Any]
    response: CreateServiceInstanceBindingResponse


@dataclass
class InMemoryBrokerState:
    """Instances keyed by id; bindings keyed by (instance id, binding id)."""

    instances: dict[str, StoredInstance] = field(default_factory=dict)
    bindings: dict[tuple[str, str], StoredBinding] = field(default_factory=dict)
    lock: threading.Lock = field(default_factory=threading.Lock)
