# hzoperator

`hzoperator` models the custom resources of the Hazelcast platform operator
(Hazelcast clusters, Management Center, hot backups and map configurations)
as plain Python dataclasses and enums. It also has a small generator that reads
the Go files that define those types and writes an AsciiDoc API reference.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Resource model

Every resource kind has its own module:

- `hzoperator.hazelcast_types`: `Hazelcast`, `HazelcastSpec`, `HazelcastList`,
  `ExposeExternallyConfiguration`, `HazelcastPersistenceConfiguration`,
  `RestoreConfiguration`, `SchedulingConfiguration`, `AgentConfiguration`, the status
  types, the enums (`Phase`, `ServiceType`, `PullPolicy`, `MemberAccess`, ...),
  `GROUP_VERSION` and the `fnv32a` hash
- `hzoperator.managementcenter_types`: `ManagementCenter`, `ManagementCenterSpec`,
  `ExternalConnectivityConfiguration`, `PersistenceConfiguration`, `HazelcastClusterConfig`
- `hzoperator.hotbackup_types`: `HotBackup`, `HotBackupSpec`, `HotBackupStatus` and
  `HotBackupState`, whose `is_finished()` and `is_running()` tell where a backup stands
- `hzoperator.map_types`: `Map`, `MapSpec`, `EvictionConfig`, `IndexConfig`,
  `BitmapIndexOptionsConfig` and the wire encoders `encode_max_size_policy`,
  `encode_eviction_policy_type`, `encode_index_type` and
  `encode_unique_key_transition` (each takes an enum member or its string value and
  raises `ValueError` for an unknown one)

The helper methods give the operator's answers for a configuration:

```python
from hzoperator.hazelcast_types import (
    ExposeExternallyConfiguration,
    ExposeExternallyType,
    MemberAccess,
    ServiceType,
)

conf = ExposeExternallyConfiguration(
    type=ExposeExternallyType.SMART,
    member_access=MemberAccess.NODE_PORT_NODE_NAME,
)
conf.is_enabled()                   # True
conf.uses_node_name()               # True
conf.discovery_k8s_service_type()   # ServiceType.LOAD_BALANCER
conf.member_access_service_type()   # ServiceType.NODE_PORT
```

A `Hazelcast` resource gives its image name and a name that is unique across
namespaces:

```python
from hzoperator.hazelcast_types import Hazelcast, HazelcastSpec, ObjectMeta

hz = Hazelcast(
    metadata=ObjectMeta(name="hazelcast", namespace="default"),
    spec=HazelcastSpec(repository="docker.io/hazelcast/hazelcast", version="5.1.2"),
)
hz.docker_image()          # "docker.io/hazelcast/hazelcast:5.1.2"
hz.cluster_scoped_name()   # "hazelcast-<FNV-1a hash of the namespace>"
```

`Map.map_name()` returns the name from the spec, or the resource name when the spec
leaves it empty.

## API reference generator

`hz-apidocgen` reads one or more Go files with type definitions and writes an
AsciiDoc reference to standard output: a table of contents, a table of fields for
every struct type that has fields (description, type, whether the field is required
and its `+kubebuilder:default`), and a table of values for every string type with
its constants. If a file cannot be read or parsed, the message goes to standard
error and the command exits with status 1.

```
hz-apidocgen api/v1alpha1/hazelcast_types.go api/v1alpha1/map_types.go > api-ref.adoc
```

The same from Python:

```python
from hzoperator.apidocgen import render_api_docs

text = render_api_docs(["api/v1alpha1/hazelcast_types.go"])
```

The lower-level pieces are available too: `hzoperator.gosource.parse_go_file` and
`parse_go_source` return a `GoPackage` with the parsed type and constant
declarations (raising `GoSyntaxError` on bad input), `DocGenerator` renders a
sequence of such packages, and `fmt_raw_doc`, `field_name`, `field_required`,
`field_default` and `escape_type_name` apply the formatting rules one at a time.
The Go reader understands declarations only; function bodies, imports and variables
are skipped.

## What it does not do

The package holds the resource model and the documentation generator only. It does
not connect to a Kubernetes cluster or a Hazelcast cluster, does not reconcile
resources, does not apply defaults or validation the way the cluster would, and
does not produce CRD manifests. The model's objects are not serialised to or read
from YAML or JSON by the package.