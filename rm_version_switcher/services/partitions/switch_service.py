from typing import Optional

from rm_version_switcher import constants
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.partition_errors import (
    InvalidPartitionNumber,
    SwitchError,
    VersionNotFound,
)
from rm_version_switcher.models.runcommand_error import RunCommandError
from rm_version_switcher.schemas.partitions.partitions import (
    DeviceFamily,
    SwitchMethod,
)
from rm_version_switcher.services.partitions.device_service import DeviceService
from rm_version_switcher.services.partitions.partition_service import (
    PartitionService,
)
from rm_version_switcher.services.partitions.version_service import (
    VersionService,
    compare_versions,
)
from rm_version_switcher.utils.general import run_command

log = get_logger(__name__)


def select_switch_method(current_version: str, target_version: str) -> SwitchMethod:
    """
    Pick the NextGen switch mechanism.

    A running 3.22+ image denies writes to root_part, and a 3.22+ target
    only boots when selected through the mmc boot partition register, so
    mmc is used when either side is at or above 3.22.
    """
    if (
        compare_versions(current_version, constants.MMC_BOOT_VERSION) >= 0
        or compare_versions(target_version, constants.MMC_BOOT_VERSION) >= 0
    ):
        return SwitchMethod.MMC
    return SwitchMethod.SYSFS


def fw_setenv_commands(new_partition: int, old_partition: int) -> list:
    """The u-boot environment writes that schedule new_partition, in order"""
    return [
        [constants.FW_SETENV_CMD, "upgrade_available", "1"],
        [constants.FW_SETENV_CMD, "bootcount", "0"],
        [constants.FW_SETENV_CMD, "fallback_partition", str(old_partition)],
        [constants.FW_SETENV_CMD, constants.ACTIVE_PARTITION_VAR, str(new_partition)],
    ]


def mmc_bootpart_command(partition: int) -> list:
    slot, boot_device = constants.MMC_BOOT_TARGETS[partition]
    return [constants.MMC_CMD, "bootpart", "enable", slot, "0", boot_device]


class BootSwitchService:
    """
    Makes a partition the next-boot target using the mechanism of the device family.

    Writes are durable and are not rolled back: if one of the u-boot
    environment writes fails the earlier ones stay applied.
    """

    ROOT_PART_PATH = constants.ROOT_PART_FILE

    def __init__(
        self,
        device_service: Optional[DeviceService] = None,
        partition_service: Optional[PartitionService] = None,
        version_service: Optional[VersionService] = None,
    ):
        self.device_service = device_service or DeviceService()
        self.partition_service = partition_service or PartitionService()
        self.version_service = version_service or VersionService()

    def switch_boot(self, target: int, previous: int) -> None:
        """
        Schedule `target` as the next-boot partition.

        Args:
            target: Partition to boot next (2 or 3)
            previous: Partition currently scheduled, recorded as fallback

        Raises:
            InvalidPartitionNumber: If target is not 2 or 3
            SwitchError: If a hardware or firmware write fails
        """
        if target not in constants.PARTITIONS:
            raise InvalidPartitionNumber(target)

        family = self.device_service.classify()

        if family == DeviceFamily.NEXTGEN:
            layout = self.partition_service.resolve(family)
            target_version = self.version_service.get_partition_version(layout, target)
            log.info(f"Setting next boot to version {target_version} (partition {target})")
            self.switch_nextgen(target, target_version)
        else:
            log.info(f"Setting next boot to partition {target}")
            self.switch_standard(target, previous)

        log.info(f"Next boot set to partition {target}")

    def switch_standard(self, new_partition: int, old_partition: int) -> None:
        """
        Raises:
            SwitchError: On the first failing fw_setenv, later writes are skipped
        """
        for cmd in fw_setenv_commands(new_partition, old_partition):
            log.debug(f"Running: {' '.join(cmd)}")
            try:
                run_command(cmd)
            except (RunCommandError, OSError) as e:
                log.debug(f"ERROR: Command failed: {e}")
                log.error(f"Failed to run {' '.join(cmd)}: {e}")
                raise SwitchError(f"failed to run {' '.join(cmd)}: {e}") from e
            log.debug("Success")

    def get_current_version(self) -> str:
        try:
            return self.version_service.get_running_version()
        except VersionNotFound:
            log.warning(
                f"Could not read running version, assuming {constants.NEXTGEN_FALLBACK_SWITCH_VERSION}"
            )
            return constants.NEXTGEN_FALLBACK_SWITCH_VERSION

    def switch_nextgen(self, new_partition: int, target_version: str) -> SwitchMethod:
        """
        Returns:
            SwitchMethod: The mechanism that was used

        Raises:
            InvalidPartitionNumber: If new_partition is not 2 or 3
            SwitchError: If the mmc command or sysfs write fails
        """
        if new_partition not in constants.PARTITIONS:
            raise InvalidPartitionNumber(new_partition)

        current_version = self.get_current_version()
        method = select_switch_method(current_version, target_version)
        log.debug(
            f"Running {current_version}, target {target_version}: using {method.value}"
        )

        if method == SwitchMethod.MMC:
            cmd = mmc_bootpart_command(new_partition)
            log.debug(f"Running: {' '.join(cmd)}")
            try:
                run_command(cmd)
            except (RunCommandError, OSError) as e:
                log.error(f"mmc bootpart enable failed: {e}")
                raise SwitchError(f"failed to run mmc bootpart enable: {e}") from e
            return method

        label = "a" if new_partition == 2 else "b"
        log.debug(f"Writing '{label}' to {self.ROOT_PART_PATH}")
        try:
            with open(self.ROOT_PART_PATH, "w") as f:
                f.write(label)
        except OSError as e:
            log.error(f"Writing {self.ROOT_PART_PATH} failed: {e}")
            raise SwitchError(f"failed to set boot partition: {e}") from e
        return method

    def reboot(self) -> None:
        """
        Raises:
            SwitchError: If the reboot command fails
        """
        try:
            run_command([constants.REBOOT_CMD])
        except (RunCommandError, OSError) as e:
            raise SwitchError(f"failed to reboot: {e}") from e
