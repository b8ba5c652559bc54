import re

from rm_version_switcher import constants
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.partition_errors import (
    InvalidPartitionNumber,
    ResolutionError,
    VersionNotFound,
)
from rm_version_switcher.models.runcommand_error import RunCommandError
from rm_version_switcher.schemas.partitions.partitions import (
    DeviceFamily,
    PartitionLayout,
)
from rm_version_switcher.services.partitions.version_service import (
    compare_versions,
    read_version,
)
from rm_version_switcher.utils.general import run_command

log = get_logger(__name__)


def parse_partition_number(device: str) -> int:
    """
    Parse the partition number from a device path, e.g. /dev/mmcblk2p3 -> 3.

    Raises:
        InvalidPartitionNumber: If there is no "p<N>" suffix or N is not 2 or 3
    """
    match = re.search(r"p(\d+)$", device)
    if not match:
        raise InvalidPartitionNumber(
            None, f"could not parse partition number from {device}"
        )

    partition = int(match.group(1))
    if partition not in constants.PARTITIONS:
        raise InvalidPartitionNumber(
            partition, f"unexpected partition number {partition} in {device}"
        )
    return partition


def other_partition(partition: int) -> int:
    """The numeric complement of a partition within {2, 3}"""
    if partition not in constants.PARTITIONS:
        raise InvalidPartitionNumber(partition)
    return 3 if partition == 2 else 2


class PartitionService:
    """
    Core service for resolving the partition layout of the running device.

    This service handles:
    - Detecting the running root partition
    - Identifying the alternate partition
    - Reading the configured next-boot partition, per device family
    """

    BOOT_PART_PATH = constants.BOOT_PART_FILE
    ROOT_PART_PATH = constants.ROOT_PART_FILE

    def resolve(self, family: DeviceFamily) -> PartitionLayout:
        """
        Resolve running, alternate and next-boot partitions.

        Args:
            family: Device family as returned by DeviceService.classify

        Returns:
            PartitionLayout: The resolved layout

        Raises:
            ResolutionError: If the running partition cannot be determined
        """
        if family == DeviceFamily.NEXTGEN:
            layout = self._resolve_nextgen()
        else:
            layout = self._resolve_standard()

        log.debug(
            f"Resolved partitions: runningP={layout.running}, otherP={layout.other}, "
            f"bootP={layout.next_boot}, root device {layout.root_device}"
        )
        return layout

    def get_root_device(self) -> str:
        """
        Get the running root block device using rootdev.

        Raises:
            ResolutionError: If rootdev fails
        """
        try:
            result = run_command([constants.ROOTDEV_CMD])
        except (RunCommandError, OSError) as e:
            log.error(f"Error getting root device: {e}")
            raise ResolutionError(f"failed to get root device: {e}") from e
        return result.stdout.strip()

    def get_swupdate_device(self) -> str:
        """
        Get the active device path as reported by swupdate.

        Raises:
            ResolutionError: If swupdate fails
        """
        try:
            result = run_command([constants.SWUPDATE_CMD, "-g"])
        except (RunCommandError, OSError) as e:
            log.error(f"Error getting active partition from swupdate: {e}")
            raise ResolutionError(f"failed to get active partition: {e}") from e
        return result.stdout.strip()

    def _parse_running(self, device: str) -> int:
        try:
            return parse_partition_number(device)
        except InvalidPartitionNumber as e:
            log.error(f"Error parsing running partition: {e}")
            raise ResolutionError(f"failed to parse active partition: {e}") from e

    def _resolve_standard(self) -> PartitionLayout:
        root_device = self.get_root_device()
        running = self._parse_running(root_device)
        other = other_partition(running)
        next_boot = self.get_fw_next_boot_partition(running)
        return PartitionLayout(running, other, next_boot, root_device)

    def get_fw_next_boot_partition(self, running: int) -> int:
        """
        Read active_partition from the u-boot environment.

        Falls back to the running partition when the variable is missing or
        does not name partition 2 or 3.
        """
        try:
            result = run_command(
                [constants.FW_PRINTENV_CMD, constants.ACTIVE_PARTITION_VAR]
            )
        except (RunCommandError, OSError) as e:
            log.warning(f"Could not read {constants.ACTIVE_PARTITION_VAR}: {e}")
            return running

        line = result.grep_stdout_for_string(f"{constants.ACTIVE_PARTITION_VAR}=")
        parts = line.strip().split("=")
        if len(parts) == 2:
            try:
                partition = int(parts[1])
            except ValueError:
                partition = None
            if partition in constants.PARTITIONS:
                return partition

        log.warning(
            f"Malformed {constants.ACTIVE_PARTITION_VAR} value '{result.stdout.strip()}', "
            f"assuming partition {running}"
        )
        return running

    def _resolve_nextgen(self) -> PartitionLayout:
        root_device = self.get_swupdate_device()
        running = self._parse_running(root_device)
        other = other_partition(running)

        try:
            current_version = read_version("/")
        except VersionNotFound:
            current_version = constants.NEXTGEN_FALLBACK_RESOLVE_VERSION
            log.warning(
                f"Could not read running version, assuming {current_version} for next boot detection"
            )

        try:
            next_boot = self.get_nextgen_next_boot_partition(current_version)
        except ResolutionError as e:
            log.warning(f"{e}, assuming next boot is partition {running}")
            next_boot = running

        return PartitionLayout(running, other, next_boot, root_device)

    def get_nextgen_next_boot_partition(self, current_version: str) -> int:
        """
        Read the next-boot partition of a NextGen device.

        Images from 3.22 on expose it as boot_part ("1" or "2"); older ones,
        or systems without that attribute, as the root_part letter.

        Raises:
            ResolutionError: If the attribute cannot be read or holds an unexpected value
        """
        if compare_versions(current_version, constants.MMC_BOOT_VERSION) >= 0:
            try:
                boot_part = self._read_attribute(self.BOOT_PART_PATH)
            except FileNotFoundError:
                log.debug(f"{self.BOOT_PART_PATH} not found, using legacy root_part")
                return self.get_legacy_next_boot_partition()
            except OSError as e:
                raise ResolutionError(f"failed to read boot_part: {e}") from e

            if boot_part not in constants.BOOT_PART_VALUES:
                raise ResolutionError(f"unexpected boot_part value: {boot_part}")
            return constants.BOOT_PART_VALUES[boot_part]

        return self.get_legacy_next_boot_partition()

    def get_legacy_next_boot_partition(self) -> int:
        """
        Raises:
            ResolutionError: If root_part cannot be read or is not "a"/"b"
        """
        try:
            root_part = self._read_attribute(self.ROOT_PART_PATH)
        except OSError as e:
            raise ResolutionError(f"failed to read root_part: {e}") from e

        if root_part not in constants.ROOT_PART_VALUES:
            raise ResolutionError(f"unexpected root_part value: {root_part}")
        return constants.ROOT_PART_VALUES[root_part]

    @staticmethod
    def _read_attribute(path: str) -> str:
        with open(path, "r", errors="replace") as f:
            return f.read().strip()
