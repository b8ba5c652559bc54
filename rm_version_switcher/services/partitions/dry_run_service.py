import os
from typing import Optional

from rm_version_switcher import constants
from rm_version_switcher.core.config import settings
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.partition_errors import (
    InvalidPartitionNumber,
    SwitchError,
)
from rm_version_switcher.schemas.partitions.partitions import (
    DeviceFamily,
    SystemInfo,
)

log = get_logger(__name__)


class DryRunStore:
    """
    File-backed stand-in for the live device.

    Partition 3 is always active and partition 2 the fallback, with fixed
    versions. Only the next-boot selection is persisted, as a single digit
    in the marker file.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or settings.DRY_RUN_FILE

    def load_next_boot(self) -> int:
        """
        Returns:
            int: Stored selection, or partition 3 if the file is missing or invalid
        """
        try:
            with open(self.path, "r", errors="replace") as f:
                content = f.read().strip()
        except FileNotFoundError:
            return constants.DRY_RUN_DEFAULT_NEXT_BOOT
        except OSError as e:
            log.warning(f"Could not read {self.path}: {e}")
            return constants.DRY_RUN_DEFAULT_NEXT_BOOT

        try:
            partition = int(content)
        except ValueError:
            log.debug(f"Ignoring invalid dry run content '{content}'")
            return constants.DRY_RUN_DEFAULT_NEXT_BOOT

        if partition not in constants.PARTITIONS:
            log.debug(f"Ignoring out of range dry run partition {partition}")
            return constants.DRY_RUN_DEFAULT_NEXT_BOOT
        return partition

    def snapshot(self) -> SystemInfo:
        active = constants.DRY_RUN_ACTIVE_PARTITION
        fallback = constants.DRY_RUN_FALLBACK_PARTITION
        return SystemInfo.from_layout(
            running=active,
            other=fallback,
            next_boot=self.load_next_boot(),
            active_version=constants.DRY_RUN_VERSIONS[active],
            fallback_version=constants.DRY_RUN_VERSIONS[fallback],
            device_family=DeviceFamily.STANDARD,
        )

    def switch_boot(self, target: int, previous: int) -> None:
        """
        Persist `target` as the next-boot selection.

        Raises:
            InvalidPartitionNumber: If target is not 2 or 3
            SwitchError: If the marker file cannot be written
        """
        if target not in constants.PARTITIONS:
            raise InvalidPartitionNumber(target)

        try:
            with open(self.path, "w") as f:
                f.write(str(target))
        except OSError as e:
            raise SwitchError(f"failed to save dry run state: {e}") from e

        log.info(f"[DRY RUN] saved boot partition {target} (was {previous}) to {self.path}")

    def reboot(self) -> None:
        log.info("[DRY RUN] reboot skipped")

    def reset(self) -> None:
        """Remove the marker file, restoring the defaults"""
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
