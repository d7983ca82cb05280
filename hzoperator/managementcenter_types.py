"""Resource model of the Management Center custom resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hzoperator.hazelcast_types import (
    ObjectMeta,
    Phase,
    PullPolicy,
    SchedulingConfiguration,
    ServiceType,
)


class ExternalConnectivityType(str, Enum):
    """How Management Center is exposed."""

    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"


@dataclass
class ExternalConnectivityConfiguration:
    """How the Management Center pod is exposed."""

    type: ExternalConnectivityType | None = None

    def management_center_service_type(self) -> ServiceType:
        """Service type for Management Center, LoadBalancer by default."""
        if self.type == ExternalConnectivityType.CLUSTER_IP:
            return ServiceType.CLUSTER_IP
        if self.type == ExternalConnectivityType.NODE_PORT:
            return ServiceType.NODE_PORT
        return ServiceType.LOAD_BALANCER

    def is_enabled(self) -> bool:
        """True if external connectivity is configured."""
        return self.type is not None


@dataclass
class HazelcastClusterConfig:
    """A Hazelcast cluster that Management Center connects to."""

    name: str = ""
    address: str = ""


@dataclass
class PersistenceConfiguration:
    """Management Center persistence settings."""

    enabled: bool = False
    existing_volume_claim_name: str = ""
    storage_class: str | None = None
    size: str | None = None

    def is_enabled(self) -> bool:
        return self.enabled


@dataclass
class ManagementCenterSpec:
    """Desired state of Management Center."""

    repository: str = ""
    version: str = ""
    image_pull_policy: PullPolicy | None = None
    image_pull_secrets: list[str] = field(default_factory=list)
    license_key_secret: str = ""
    hazelcast_clusters: list[HazelcastClusterConfig] = field(default_factory=list)
    external_connectivity: ExternalConnectivityConfiguration | None = None
    persistence: PersistenceConfiguration | None = None
    scheduling: SchedulingConfiguration | None = None
    resources: dict[str, Any] | None = None


@dataclass
class ManagementCenterStatus:
    """Observed state of Management Center."""

    phase: Phase | None = None
    message: str = ""
    external_addresses: str = ""


@dataclass
class ManagementCenter:
    """The ManagementCenter custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: ManagementCenterSpec = field(default_factory=ManagementCenterSpec)
    status: ManagementCenterStatus = field(default_factory=ManagementCenterStatus)

    kind = "ManagementCenter"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def docker_image(self) -> str:
        return f"{self.spec.repository}:{self.spec.version}"

    def external_address_enabled(self) -> bool:
        """True if Management Center is exposed through a LoadBalancer."""
        connectivity = self.spec.external_connectivity
        return (
            connectivity is not None
            and connectivity.is_enabled()
            and connectivity.type == ExternalConnectivityType.LOAD_BALANCER
        )


@dataclass
class ManagementCenterList:
    """A list of ManagementCenter resources."""

    items: list[ManagementCenter] = field(default_factory=list)