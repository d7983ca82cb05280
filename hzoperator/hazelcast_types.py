"""Resource model of the Hazelcast custom resource and its configuration."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

_FNV32_OFFSET = 0x811C9DC5
_FNV32_PRIME = 0x01000193
_UINT32_MASK = 0xFFFFFFFF


@dataclass(frozen=True)
class GroupVersion:
    """API group and version under which the resources are registered."""

    group: str
    version: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}"

    def __str__(self) -> str:
        return self.api_version


GROUP_VERSION = GroupVersion(group="hazelcast.com", version="v1alpha1")


class ServiceType(str, Enum):
    """Kubernetes service types."""

    CLUSTER_IP = "ClusterIP"
    NODE_PORT = "NodePort"
    LOAD_BALANCER = "LoadBalancer"
    EXTERNAL_NAME = "ExternalName"


class PullPolicy(str, Enum):
    """Container image pull policies."""

    ALWAYS = "Always"
    NEVER = "Never"
    IF_NOT_PRESENT = "IfNotPresent"


class Phase(str, Enum):
    """Current state of a cluster."""

    RUNNING = "Running"
    FAILED = "Failed"
    PENDING = "Pending"


class BackupType(str, Enum):
    """Storage options for hot backups."""

    EXTERNAL = "External"
    LOCAL = "Local"


class DataRecoveryPolicyType(str, Enum):
    """Data recovery policy applied when the whole cluster restarts."""

    FULL_RECOVERY = "FullRecoveryOnly"
    MOST_RECENT = "PartialRecoveryMostRecent"
    MOST_COMPLETE = "PartialRecoveryMostComplete"


class ExposeExternallyType(str, Enum):
    """How Hazelcast members are exposed."""

    SMART = "Smart"
    UNISOCKET = "Unisocket"


class MemberAccess(str, Enum):
    """How each member is reached from an external client."""

    NODE_PORT_EXTERNAL_IP = "NodePortExternalIP"
    NODE_PORT_NODE_NAME = "NodePortNodeName"
    LOAD_BALANCER = "LoadBalancer"


class RestoreState(str, Enum):
    """State of a cluster restore."""

    UNKNOWN = "Unknown"
    FAILED = "Failed"
    IN_PROGRESS = "InProgress"
    SUCCEEDED = "Succeeded"


def fnv32a(txt: str) -> int:
    """Return the 32-bit FNV-1a hash of the UTF-8 encoding of ``txt``."""
    value = _FNV32_OFFSET
    for byte in txt.encode("utf-8"):
        value = ((value ^ byte) * _FNV32_PRIME) & _UINT32_MASK
    return value


@dataclass
class ObjectMeta:
    """Name and namespace of a resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)


@dataclass
class AgentConfiguration:
    """Image of the backup and restore agent."""

    repository: str = ""
    version: str = ""


@dataclass
class RestoreConfiguration:
    """Configuration of a restore operation."""

    secret: str = ""
    bucket_uri: str = ""

    def is_empty(self) -> bool:
        return not self.secret and not self.bucket_uri


@dataclass
class PersistencePvcConfiguration:
    """Persistent volume claim settings."""

    access_modes: list[str] = field(default_factory=list)
    request_storage: str | None = None
    storage_class_name: str | None = None


@dataclass
class HazelcastPersistenceConfiguration:
    """Hazelcast persistence and storage settings."""

    base_dir: str = ""
    cluster_data_recovery_policy: DataRecoveryPolicyType | None = None
    auto_force_start: bool = False
    data_recovery_timeout: int = 0
    pvc: PersistencePvcConfiguration = field(default_factory=PersistencePvcConfiguration)
    host_path: str = ""
    restore: RestoreConfiguration | None = None
    backup_type: BackupType | None = None

    def auto_remove_stale_data(self) -> bool:
        """True unless the recovery policy is full recovery only."""
        return self.cluster_data_recovery_policy != DataRecoveryPolicyType.FULL_RECOVERY

    def is_enabled(self) -> bool:
        return self.base_dir != ""

    def use_host_path(self) -> bool:
        return self.host_path != ""

    def is_external(self) -> bool:
        return self.backup_type == BackupType.EXTERNAL

    def is_restore_enabled(self) -> bool:
        return self.restore is not None and not self.restore.is_empty()


@dataclass
class SchedulingConfiguration:
    """Pod scheduling details."""

    affinity: dict[str, Any] | None = None
    tolerations: list[dict[str, Any]] = field(default_factory=list)
    node_selector: dict[str, str] = field(default_factory=dict)
    topology_spread_constraints: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class ExposeExternallyConfiguration:
    """How the cluster is exposed to external clients."""

    type: ExposeExternallyType | None = None
    discovery_service_type: ServiceType | None = None
    member_access: MemberAccess | None = None

    def is_enabled(self) -> bool:
        """True if any part of the configuration is set."""
        return any(getattr(self, f.name) for f in fields(self))

    def is_smart(self) -> bool:
        return self.type == ExposeExternallyType.SMART

    def uses_node_name(self) -> bool:
        return self.member_access == MemberAccess.NODE_PORT_NODE_NAME

    def discovery_k8s_service_type(self) -> ServiceType:
        """Service type used for discovery; LoadBalancer unless NodePort is set."""
        if self.discovery_service_type == ServiceType.NODE_PORT:
            return ServiceType.NODE_PORT
        return ServiceType.LOAD_BALANCER

    def member_access_type(self) -> MemberAccess:
        """Member access, NodePortExternalIP by default."""
        return self.member_access or MemberAccess.NODE_PORT_EXTERNAL_IP

    def member_access_service_type(self) -> ServiceType:
        """Service type for each member; NodePort unless LoadBalancer access is set."""
        if self.member_access == MemberAccess.LOAD_BALANCER:
            return ServiceType.LOAD_BALANCER
        return ServiceType.NODE_PORT


@dataclass
class HazelcastSpec:
    """Desired state of a Hazelcast cluster."""

    cluster_size: int | None = None
    repository: str = ""
    version: str = ""
    image_pull_policy: PullPolicy | None = None
    image_pull_secrets: list[str] = field(default_factory=list)
    license_key_secret: str = ""
    expose_externally: ExposeExternallyConfiguration | None = None
    cluster_name: str = ""
    scheduling: SchedulingConfiguration | None = None
    resources: dict[str, Any] | None = None
    persistence: HazelcastPersistenceConfiguration | None = None
    agent: AgentConfiguration | None = None


@dataclass
class RestoreStatus:
    """Progress of a cluster restore."""

    state: RestoreState = RestoreState.UNKNOWN
    remaining_validation_time: int = 0
    remaining_data_load_time: int = 0


@dataclass
class HazelcastMemberStatus:
    """Observed state of one member."""

    pod_name: str = ""
    uid: str = ""
    ip: str = ""
    version: str = ""
    state: str = ""
    master: bool = False
    lite: bool = False
    owned_partitions: int = 0
    ready: bool = False
    message: str = ""
    reason: str = ""
    restart_count: int = 0


@dataclass
class HazelcastClusterStatus:
    """Ready members in the form ``<ready>/<desired>``."""

    ready_members: str = ""


@dataclass
class HazelcastStatus:
    """Observed state of a Hazelcast cluster."""

    phase: Phase | None = None
    cluster: HazelcastClusterStatus = field(default_factory=HazelcastClusterStatus)
    message: str = ""
    external_addresses: str = ""
    members: list[HazelcastMemberStatus] = field(default_factory=list)
    restore: RestoreStatus | None = None


@dataclass
class Hazelcast:
    """The Hazelcast custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: HazelcastSpec = field(default_factory=HazelcastSpec)
    status: HazelcastStatus = field(default_factory=HazelcastStatus)

    kind = "Hazelcast"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def docker_image(self) -> str:
        return f"{self.spec.repository}:{self.spec.version}"

    def cluster_scoped_name(self) -> str:
        """Name unique across namespaces, suffixed with a hash of the namespace."""
        return f"{self.metadata.name}-{fnv32a(self.metadata.namespace)}"

    def external_address_enabled(self) -> bool:
        expose = self.spec.expose_externally
        return (
            expose is not None
            and expose.is_enabled()
            and expose.discovery_service_type == ServiceType.LOAD_BALANCER
        )

    def agent_docker_image(self) -> str:
        agent = self.spec.agent
        if agent is None:
            raise ValueError("agent configuration is not set")
        return f"{agent.repository}:{agent.version}"


@dataclass
class HazelcastList:
    """A list of Hazelcast resources."""

    items: list[Hazelcast] = field(default_factory=list)