from typing import Optional

from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.schemas.partitions.partitions import SystemInfo
from rm_version_switcher.services.partitions.device_service import DeviceService
from rm_version_switcher.services.partitions.partition_service import (
    PartitionService,
)
from rm_version_switcher.services.partitions.version_service import VersionService

log = get_logger(__name__)


class SystemStateService:
    """
    Builds a SystemInfo snapshot from live device state.
    """

    def __init__(
        self,
        device_service: Optional[DeviceService] = None,
        partition_service: Optional[PartitionService] = None,
        version_service: Optional[VersionService] = None,
    ):
        self.device_service = device_service or DeviceService()
        self.partition_service = partition_service or PartitionService()
        self.version_service = version_service or VersionService()

    def snapshot(self) -> SystemInfo:
        """
        Query the device for its current boot state.

        Returns:
            SystemInfo: Fresh snapshot

        Raises:
            ResolutionError: If the partition layout cannot be resolved
        """
        family = self.device_service.classify()
        layout = self.partition_service.resolve(family)

        active_version = self.version_service.get_partition_version(
            layout, layout.running
        )
        fallback_version = self.version_service.get_partition_version(
            layout, layout.other
        )

        info = SystemInfo.from_layout(
            running=layout.running,
            other=layout.other,
            next_boot=layout.next_boot,
            active_version=active_version,
            fallback_version=fallback_version,
            device_family=family,
        )

        log.debug(
            f"SystemInfo: runningP={layout.running}, otherP={layout.other}, bootP={layout.next_boot}"
        )
        log.debug(
            f"Active: Number={info.active.number}, Version={info.active.version}, "
            f"IsNextBoot={info.active.is_next_boot}"
        )
        log.debug(
            f"Fallback: Number={info.fallback.number}, Version={info.fallback.version}, "
            f"IsNextBoot={info.fallback.is_next_boot}"
        )
        return info
