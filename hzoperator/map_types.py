"""Resource model of the Map custom resource and its wire encodings."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hzoperator.hazelcast_types import ObjectMeta


class MaxSizePolicyType(str, Enum):
    """Policy deciding when a map has reached its maximum size."""

    PER_NODE = "PER_NODE"
    PER_PARTITION = "PER_PARTITION"
    USED_HEAP_PERCENTAGE = "USED_HEAP_PERCENTAGE"
    USED_HEAP_SIZE = "USED_HEAP_SIZE"
    FREE_HEAP_PERCENTAGE = "FREE_HEAP_PERCENTAGE"
    FREE_HEAP_SIZE = "FREE_HEAP_SIZE"
    USED_NATIVE_MEMORY_SIZE = "USED_NATIVE_MEMORY_SIZE"
    USED_NATIVE_MEMORY_PERCENTAGE = "USED_NATIVE_MEMORY_PERCENTAGE"
    FREE_NATIVE_MEMORY_SIZE = "FREE_NATIVE_MEMORY_SIZE"
    FREE_NATIVE_MEMORY_PERCENTAGE = "FREE_NATIVE_MEMORY_PERCENTAGE"


class EvictionPolicyType(str, Enum):
    """Which entries are removed when a map reaches its maximum size."""

    LRU = "LRU"
    LFU = "LFU"
    NONE = "NONE"
    RANDOM = "RANDOM"


class IndexType(str, Enum):
    """Kind of index built over map data."""

    SORTED = "SORTED"
    HASH = "HASH"
    BITMAP = "BITMAP"


class UniqueKeyTransition(str, Enum):
    """Unique key transformation for bitmap indexes."""

    OBJECT = "OBJECT"
    LONG = "LONG"
    RAW = "RAW"


class MapConfigState(str, Enum):
    """State of a map configuration."""

    FAILED = "Failed"
    SUCCESS = "Success"
    PENDING = "Pending"
    # Added to all members, waiting to be persisted into the ConfigMap.
    PERSISTING = "Persisting"


@dataclass
class EvictionConfig:
    """How data is removed from a map when it reaches its maximum size."""

    eviction_policy: EvictionPolicyType | None = None
    max_size: int | None = None
    max_size_policy: MaxSizePolicyType | None = None


@dataclass
class BitmapIndexOptionsConfig:
    """Options for a bitmap index."""

    unique_key: str = ""
    unique_key_transition: UniqueKeyTransition = UniqueKeyTransition.OBJECT


@dataclass
class IndexConfig:
    """An index created over map data."""

    type: IndexType = IndexType.SORTED
    attributes: list[str] = field(default_factory=list)
    name: str = ""
    bitmap_index_options: BitmapIndexOptionsConfig | None = None


@dataclass
class MapSpec:
    """Desired state of a Hazelcast map configuration."""

    hazelcast_resource_name: str = ""
    name: str = ""
    backup_count: int | None = None
    time_to_live_seconds: int | None = None
    max_idle_seconds: int | None = None
    eviction: EvictionConfig | None = None
    indexes: list[IndexConfig] = field(default_factory=list)
    persistence_enabled: bool = False


@dataclass
class MapStatus:
    """Observed state of a map configuration."""

    state: MapConfigState | None = None
    message: str = ""
    member_statuses: dict[str, MapConfigState] = field(default_factory=dict)


@dataclass
class Map:
    """The Map custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: MapSpec = field(default_factory=MapSpec)
    status: MapStatus = field(default_factory=MapStatus)

    kind = "Map"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    def map_name(self) -> str:
        """Name of the map: the spec name, or the resource name if unset."""
        return self.spec.name or self.metadata.name


@dataclass
class MapList:
    """A list of Map resources."""

    items: list[Map] = field(default_factory=list)


ENCODE_MAX_SIZE_POLICY: dict[MaxSizePolicyType, int] = {
    MaxSizePolicyType.PER_NODE: 0,
    MaxSizePolicyType.PER_PARTITION: 1,
    MaxSizePolicyType.USED_HEAP_PERCENTAGE: 2,
    MaxSizePolicyType.USED_HEAP_SIZE: 3,
    MaxSizePolicyType.FREE_HEAP_PERCENTAGE: 4,
    MaxSizePolicyType.FREE_HEAP_SIZE: 5,
    MaxSizePolicyType.USED_NATIVE_MEMORY_SIZE: 6,
    MaxSizePolicyType.USED_NATIVE_MEMORY_PERCENTAGE: 7,
    MaxSizePolicyType.FREE_NATIVE_MEMORY_SIZE: 8,
    MaxSizePolicyType.FREE_NATIVE_MEMORY_PERCENTAGE: 9,
}

ENCODE_EVICTION_POLICY_TYPE: dict[EvictionPolicyType, int] = {
    EvictionPolicyType.LRU: 0,
    EvictionPolicyType.LFU: 1,
    EvictionPolicyType.NONE: 2,
    EvictionPolicyType.RANDOM: 3,
}

ENCODE_INDEX_TYPE: dict[IndexType, int] = {
    IndexType.SORTED: 0,
    IndexType.HASH: 1,
    IndexType.BITMAP: 2,
}

ENCODE_UNIQUE_KEY_TRANSITION: dict[UniqueKeyTransition, int] = {
    UniqueKeyTransition.OBJECT: 0,
    UniqueKeyTransition.LONG: 1,
    UniqueKeyTransition.RAW: 2,
}


def encode_max_size_policy(policy: MaxSizePolicyType | str) -> int:
    """Protocol code of a max size policy; raises ValueError if unknown."""
    return ENCODE_MAX_SIZE_POLICY[MaxSizePolicyType(policy)]


def encode_eviction_policy_type(policy: EvictionPolicyType | str) -> int:
    """Protocol code of an eviction policy; raises ValueError if unknown."""
    return ENCODE_EVICTION_POLICY_TYPE[EvictionPolicyType(policy)]


def encode_index_type(index_type: IndexType | str) -> int:
    """Protocol code of an index type; raises ValueError if unknown."""
    return ENCODE_INDEX_TYPE[IndexType(index_type)]


def encode_unique_key_transition(transition: UniqueKeyTransition | str) -> int:
    """Protocol code of a unique key transition; raises ValueError if unknown."""
    return ENCODE_UNIQUE_KEY_TRANSITION[UniqueKeyTransition(transition)]