"""Resource model of the HotBackup custom resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hzoperator.hazelcast_types import ObjectMeta


class HotBackupState(str, Enum):
    """State of a hot backup; ``UNSET`` means it has not been scheduled yet."""

    UNSET = ""
    UNKNOWN = "Unknown"
    PENDING = "Pending"
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    FAILURE = "Failure"
    SUCCESS = "Success"

    def is_finished(self) -> bool:
        """True once the backup has succeeded or failed."""
        return self in (HotBackupState.FAILURE, HotBackupState.SUCCESS)

    def is_running(self) -> bool:
        """True if the backup is scheduled or running but not yet finished."""
        return not self.is_finished() and self is not HotBackupState.UNSET


@dataclass
class HotBackupStatus:
    """Observed state of a hot backup."""

    state: HotBackupState = HotBackupState.UNSET
    message: str = ""


@dataclass
class HotBackupSpec:
    """Desired state of a hot backup.

    ``schedule`` holds a crontab-like expression; when empty, the backup
    runs only once when applied.
    """

    hazelcast_resource_name: str = ""
    schedule: str = ""
    bucket_uri: str = ""
    secret: str = ""


@dataclass
class HotBackup:
    """The HotBackup custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    status: HotBackupStatus = field(default_factory=HotBackupStatus)
    spec: HotBackupSpec = field(default_factory=HotBackupSpec)

    kind = "HotBackup"

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace


@dataclass
class HotBackupList:
    """A list of HotBackup resources."""

    items: list[HotBackup] = field(default_factory=list)