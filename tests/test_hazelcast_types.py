import pytest

from hzoperator.hazelcast_types import (
    GROUP_VERSION,
    AgentConfiguration,
    BackupType,
    DataRecoveryPolicyType,
    ExposeExternallyConfiguration,
    ExposeExternallyType,
    Hazelcast,
    HazelcastList,
    HazelcastPersistenceConfiguration,
    HazelcastSpec,
    MemberAccess,
    ObjectMeta,
    RestoreConfiguration,
    ServiceType,
    fnv32a,
)

EMPTY = ExposeExternallyConfiguration()
UNISOCKET_LB = ExposeExternallyConfiguration(
    type=ExposeExternallyType.UNISOCKET,
    discovery_service_type=ServiceType.LOAD_BALANCER,
)
SMART_EXTERNAL_IP = ExposeExternallyConfiguration(
    type=ExposeExternallyType.SMART,
    member_access=MemberAccess.NODE_PORT_EXTERNAL_IP,
)


@pytest.mark.parametrize(
    "conf, want",
    [(EMPTY, False), (UNISOCKET_LB, True), (SMART_EXTERNAL_IP, True)],
)
def test_is_enabled(conf, want):
    assert conf.is_enabled() is want


@pytest.mark.parametrize(
    "conf, want",
    [(EMPTY, False), (UNISOCKET_LB, False), (SMART_EXTERNAL_IP, True)],
)
def test_is_smart(conf, want):
    assert conf.is_smart() is want


@pytest.mark.parametrize(
    "conf, want",
    [
        (EMPTY, False),
        (SMART_EXTERNAL_IP, False),
        (
            ExposeExternallyConfiguration(
                type=ExposeExternallyType.SMART,
                member_access=MemberAccess.NODE_PORT_NODE_NAME,
            ),
            True,
        ),
    ],
)
def test_uses_node_name(conf, want):
    assert conf.uses_node_name() is want


@pytest.mark.parametrize(
    "conf, want",
    [
        (EMPTY, ServiceType.LOAD_BALANCER),
        (
            ExposeExternallyConfiguration(
                type=ExposeExternallyType.UNISOCKET,
                discovery_service_type=ServiceType.NODE_PORT,
            ),
            ServiceType.NODE_PORT,
        ),
        (
            ExposeExternallyConfiguration(
                type=ExposeExternallyType.SMART,
                discovery_service_type=ServiceType.LOAD_BALANCER,
            ),
            ServiceType.LOAD_BALANCER,
        ),
    ],
)
def test_discovery_k8s_service_type(conf, want):
    assert conf.discovery_k8s_service_type() == want


@pytest.mark.parametrize(
    "access, want",
    [
        (None, ServiceType.NODE_PORT),
        (MemberAccess.NODE_PORT_EXTERNAL_IP, ServiceType.NODE_PORT),
        (MemberAccess.NODE_PORT_NODE_NAME, ServiceType.NODE_PORT),
        (MemberAccess.LOAD_BALANCER, ServiceType.LOAD_BALANCER),
    ],
)
def test_member_access_service_type(access, want):
    conf = ExposeExternallyConfiguration(
        type=ExposeExternallyType.UNISOCKET, member_access=access
    )
    assert conf.member_access_service_type() == want


def test_member_access_type_defaults_to_external_ip():
    assert EMPTY.member_access_type() == MemberAccess.NODE_PORT_EXTERNAL_IP
    conf = ExposeExternallyConfiguration(member_access=MemberAccess.LOAD_BALANCER)
    assert conf.member_access_type() == MemberAccess.LOAD_BALANCER


def test_fnv32a_known_vectors():
    assert fnv32a("") == 0x811C9DC5
    assert fnv32a("a") == 0xE40C292C
    assert fnv32a("foobar") == 0xBF9CF968


def test_cluster_scoped_name():
    hz = Hazelcast(metadata=ObjectMeta(name="hz", namespace="a"))
    assert hz.cluster_scoped_name() == "hz-3826002220"


def test_docker_images():
    hz = Hazelcast(
        spec=HazelcastSpec(
            repository="docker.io/hazelcast/hazelcast",
            version="5.1.2",
            agent=AgentConfiguration(
                repository="docker.io/hazelcast/platform-operator-agent",
                version="0.1.0",
            ),
        )
    )
    assert hz.docker_image() == "docker.io/hazelcast/hazelcast:5.1.2"
    assert hz.agent_docker_image() == "docker.io/hazelcast/platform-operator-agent:0.1.0"


def test_agent_docker_image_without_agent_raises():
    with pytest.raises(ValueError):
        Hazelcast().agent_docker_image()


def test_external_address_enabled():
    assert Hazelcast().external_address_enabled() is False
    hz = Hazelcast(spec=HazelcastSpec(expose_externally=UNISOCKET_LB))
    assert hz.external_address_enabled() is True
    hz = Hazelcast(
        spec=HazelcastSpec(
            expose_externally=ExposeExternallyConfiguration(
                discovery_service_type=ServiceType.NODE_PORT
            )
        )
    )
    assert hz.external_address_enabled() is False


def test_persistence_flags():
    empty = HazelcastPersistenceConfiguration()
    assert empty.is_enabled() is False
    assert empty.use_host_path() is False
    assert empty.is_external() is False
    assert empty.is_restore_enabled() is False
    assert empty.auto_remove_stale_data() is True

    conf = HazelcastPersistenceConfiguration(
        base_dir="/data/hot-restart/",
        cluster_data_recovery_policy=DataRecoveryPolicyType.FULL_RECOVERY,
        host_path="/tmp/hz",
        backup_type=BackupType.EXTERNAL,
        restore=RestoreConfiguration(bucket_uri="gs://bucket"),
    )
    assert conf.is_enabled() is True
    assert conf.use_host_path() is True
    assert conf.is_external() is True
    assert conf.is_restore_enabled() is True
    assert conf.auto_remove_stale_data() is False


def test_restore_with_empty_configuration_is_disabled():
    conf = HazelcastPersistenceConfiguration(restore=RestoreConfiguration())
    assert RestoreConfiguration().is_empty() is True
    assert conf.is_restore_enabled() is False


def test_group_version_and_list():
    assert GROUP_VERSION.api_version == "hazelcast.com/v1alpha1"
    items = HazelcastList(items=[Hazelcast(metadata=ObjectMeta(name="x"))])
    assert [h.name for h in items.items] == ["x"]


def test_enum_values_match_wire_strings():
    assert ExposeExternallyType("Smart") is ExposeExternallyType.SMART
    assert MemberAccess("NodePortNodeName") is MemberAccess.NODE_PORT_NODE_NAME
    assert DataRecoveryPolicyType.MOST_RECENT == "PartialRecoveryMostRecent"