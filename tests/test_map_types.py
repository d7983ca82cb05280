import pytest

from hzoperator.hazelcast_types import ObjectMeta
from hzoperator.map_types import (
    BitmapIndexOptionsConfig,
    EvictionConfig,
    EvictionPolicyType,
    IndexConfig,
    IndexType,
    Map,
    MapConfigState,
    MapList,
    MapSpec,
    MapStatus,
    MaxSizePolicyType,
    UniqueKeyTransition,
    encode_eviction_policy_type,
    encode_index_type,
    encode_max_size_policy,
    encode_unique_key_transition,
)


def test_map_name_prefers_spec_name():
    m = Map(metadata=ObjectMeta(name="cr-name"), spec=MapSpec(name="my-map"))
    assert m.map_name() == "my-map"


def test_map_name_falls_back_to_resource_name():
    m = Map(metadata=ObjectMeta(name="cr-name", namespace="default"))
    assert m.map_name() == "cr-name"
    assert m.namespace == "default"


def test_map_spec_defaults_are_unset():
    spec = MapSpec(hazelcast_resource_name="hazelcast")
    assert spec.name == ""
    assert spec.backup_count is None
    assert spec.eviction is None
    assert spec.indexes == []
    assert spec.persistence_enabled is False
    assert spec.hazelcast_resource_name == "hazelcast"


def test_encodings_are_dense_and_unique():
    max_size = sorted(encode_max_size_policy(m) for m in MaxSizePolicyType)
    assert max_size == list(range(len(MaxSizePolicyType)))
    eviction = sorted(encode_eviction_policy_type(m) for m in EvictionPolicyType)
    assert eviction == list(range(len(EvictionPolicyType)))
    index = sorted(encode_index_type(m) for m in IndexType)
    assert index == list(range(len(IndexType)))
    transition = sorted(encode_unique_key_transition(m) for m in UniqueKeyTransition)
    assert transition == list(range(len(UniqueKeyTransition)))


def test_encoding_accepts_plain_strings():
    for member in MaxSizePolicyType:
        assert encode_max_size_policy(member.value) == encode_max_size_policy(member)
    for member in EvictionPolicyType:
        assert encode_eviction_policy_type(member.value) == encode_eviction_policy_type(member)
    for member in IndexType:
        assert encode_index_type(member.value) == encode_index_type(member)
    for member in UniqueKeyTransition:
        assert encode_unique_key_transition(member.value) == encode_unique_key_transition(
            member
        )


def test_unknown_max_size_policy_raises():
    with pytest.raises(ValueError):
        encode_max_size_policy("NOT_A_VALUE")


def test_unknown_eviction_policy_raises():
    with pytest.raises(ValueError):
        encode_eviction_policy_type("NOT_A_VALUE")


def test_unknown_index_type_raises():
    with pytest.raises(ValueError):
        encode_index_type("NOT_A_VALUE")


def test_unknown_unique_key_transition_raises():
    with pytest.raises(ValueError):
        encode_unique_key_transition("NOT_A_VALUE")


def test_pinned_encodings():
    assert encode_max_size_policy(MaxSizePolicyType.PER_NODE) == 0
    assert encode_eviction_policy_type(EvictionPolicyType.LRU) == 0
    assert encode_index_type(IndexType.BITMAP) == 2


def test_heap_percentage_precedes_heap_size():
    assert encode_max_size_policy("USED_HEAP_PERCENTAGE") < encode_max_size_policy(
        "USED_HEAP_SIZE"
    )
    assert encode_eviction_policy_type("LFU") < encode_eviction_policy_type("NONE")


def test_enum_values_match_resource_strings():
    assert MaxSizePolicyType("PER_NODE") is MaxSizePolicyType.PER_NODE
    assert EvictionPolicyType("NONE") is EvictionPolicyType.NONE
    assert MapConfigState("Persisting") is MapConfigState.PERSISTING


def test_index_with_bitmap_options():
    index = IndexConfig(
        type=IndexType.BITMAP,
        attributes=["age"],
        bitmap_index_options=BitmapIndexOptionsConfig(
            unique_key="id", unique_key_transition=UniqueKeyTransition.LONG
        ),
    )
    spec = MapSpec(
        hazelcast_resource_name="hazelcast",
        indexes=[index],
        eviction=EvictionConfig(
            eviction_policy=EvictionPolicyType.LRU,
            max_size=10,
            max_size_policy=MaxSizePolicyType.PER_PARTITION,
        ),
    )
    assert encode_index_type(spec.indexes[0].type) == encode_index_type("BITMAP")
    assert spec.indexes[0].bitmap_index_options.unique_key == "id"
    assert spec.eviction.max_size == 10


def test_map_status_and_list():
    status = MapStatus(
        state=MapConfigState.PENDING,
        member_statuses={"member-0": MapConfigState.SUCCESS},
    )
    m = Map(metadata=ObjectMeta(name="a"), status=status)
    lst = MapList(items=[m])
    assert lst.items[0].status.member_statuses["member-0"] is MapConfigState.SUCCESS
    assert lst.items[0].map_name() == "a"