from enum import Enum
from typing import Literal, NamedTuple

from pydantic import BaseModel, Field, model_validator

from rm_version_switcher import constants


class DeviceFamily(str, Enum):
    """Hardware/firmware generation, each with its own boot state interfaces"""

    LEGACY = "legacy"
    STANDARD = "standard"
    NEXTGEN = "nextgen"


class SwitchMethod(str, Enum):
    """Mechanism used to change the next-boot partition on NextGen devices"""

    MMC = "mmc"
    SYSFS = "sysfs"


class PartitionLayout(NamedTuple):
    """Raw partition numbers as resolved from the running system"""

    running: int
    other: int
    next_boot: int
    root_device: str


class PartitionInfo(BaseModel):
    """One of the two OS partitions"""

    number: Literal[2, 3] = Field(description="Partition number")
    version: str = Field(description="OS image version installed on the partition")
    is_active: bool = Field(description="Whether this partition is mounted as root")
    is_next_boot: bool = Field(
        description="Whether this partition is the configured next-boot target"
    )

    @property
    def label(self) -> str:
        return constants.PARTITION_LABELS[self.number]


class SystemInfo(BaseModel):
    """Snapshot of the device's boot state"""

    active: PartitionInfo = Field(description="Currently running partition")
    fallback: PartitionInfo = Field(description="Alternate partition")
    next_boot: Literal[2, 3] = Field(description="Partition that will boot next")
    device_family: DeviceFamily = Field(description="Device hardware family")

    @model_validator(mode="after")
    def check_consistency(self):
        if self.active.number == self.fallback.number:
            raise ValueError(
                f"active and fallback are both partition {self.active.number}"
            )
        if not self.active.is_active or self.fallback.is_active:
            raise ValueError("exactly the active partition must be marked active")
        if self.active.is_next_boot != (self.next_boot == self.active.number):
            raise ValueError("active partition next-boot flag disagrees with next_boot")
        if self.fallback.is_next_boot != (self.next_boot == self.fallback.number):
            raise ValueError(
                "fallback partition next-boot flag disagrees with next_boot"
            )
        return self

    def partition(self, number: int) -> PartitionInfo:
        if number == self.active.number:
            return self.active
        if number == self.fallback.number:
            return self.fallback
        raise KeyError(number)

    def version_of(self, number: int) -> str:
        return self.partition(number).version

    @classmethod
    def from_layout(
        cls,
        running: int,
        other: int,
        next_boot: int,
        active_version: str,
        fallback_version: str,
        device_family: DeviceFamily,
    ) -> "SystemInfo":
        return cls(
            active=PartitionInfo(
                number=running,
                version=active_version,
                is_active=True,
                is_next_boot=next_boot == running,
            ),
            fallback=PartitionInfo(
                number=other,
                version=fallback_version,
                is_active=False,
                is_next_boot=next_boot == other,
            ),
            next_boot=next_boot,
            device_family=device_family,
        )
