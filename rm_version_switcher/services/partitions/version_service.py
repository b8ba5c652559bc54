import os
import re
from typing import Optional

from rm_version_switcher import constants
from rm_version_switcher.core.config import settings
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.partition_errors import MountError, VersionNotFound
from rm_version_switcher.schemas.partitions.partitions import PartitionLayout
from rm_version_switcher.services.partitions.mount_service import MountService

log = get_logger(__name__)


def compare_versions(v1: str, v2: str) -> int:
    """
    Compare two dotted version strings numerically.

    Missing trailing components count as 0, as do components that are not a
    plain ASCII integer (e.g. "x", " 3", "3_0"), so "3.22" == "3.22.0"
    and "3.22" > "3.9".

    Returns:
        int: -1, 0 or 1
    """

    def to_int(part: str) -> int:
        if not re.fullmatch(r"[+-]?[0-9]+", part):
            return 0
        return int(part)

    parts1 = v1.split(".")
    parts2 = v2.split(".")

    for i in range(max(len(parts1), len(parts2))):
        num1 = to_int(parts1[i]) if i < len(parts1) else 0
        num2 = to_int(parts2[i]) if i < len(parts2) else 0

        if num1 < num2:
            return -1
        if num1 > num2:
            return 1
    return 0


def read_version_from_file(path: str, key: str) -> str:
    """
    Return the value following `key` on the first line containing it.

    The key is matched anywhere in the line so prefixed forms such as
    "export RELEASE_VERSION=" are accepted. Surrounding double quotes are stripped.

    Raises:
        VersionNotFound: If the file cannot be read or has no such key
    """
    try:
        # a corrupt partition may hold arbitrary bytes
        with open(path, "r", errors="replace") as f:
            for line in f:
                idx = line.find(key)
                if idx != -1:
                    return line[idx + len(key) :].rstrip("\r\n").strip('"')
    except OSError as e:
        raise VersionNotFound(f"Failed to open file {path}: {e}") from e

    raise VersionNotFound(f"{key} not found in file {path}")


def read_version(root_path: str = "/") -> str:
    """
    Read the OS image version below a filesystem root.

    update.conf (RELEASE_VERSION) is tried first, then os-release (IMG_VERSION).

    Raises:
        VersionNotFound: If neither file has its key
    """
    sources = [
        (constants.UPDATE_CONF_FILE, constants.UPDATE_CONF_KEY),
        (constants.OS_RELEASE_FILE, constants.OS_RELEASE_KEY),
    ]
    for relative_path, key in sources:
        try:
            return read_version_from_file(os.path.join(root_path, relative_path), key)
        except VersionNotFound as e:
            log.debug(str(e))

    raise VersionNotFound(f"version not found in update.conf or os-release under {root_path}")


class VersionService:
    """
    Reads the version label of either partition.

    The running partition is read from the live root filesystem; the
    alternate partition is mounted read-only at a scratch mount point for
    the duration of the read.
    """

    def __init__(self, mount_service: Optional[MountService] = None):
        self.mount_service = mount_service or MountService()

    def get_running_version(self) -> str:
        """
        Raises:
            VersionNotFound: If the live root has no version label
        """
        return read_version("/")

    @staticmethod
    def partition_device(root_device: str, partition: int) -> str:
        """
        Build the device path of a partition on the same disk as root_device.

        e.g. ("/dev/mmcblk2p2", 3) -> "/dev/mmcblk2p3"
        """
        return re.sub(r"p\d+$", "", root_device) + f"p{partition}"

    def mount_point_for(self, partition: int) -> str:
        return os.path.join(settings.MOUNT_BASE_DIR, f"mount_p{partition}")

    def get_partition_version(self, layout: PartitionLayout, partition: int) -> str:
        """
        Get the version of a partition, degrading to "unknown".

        Args:
            layout: Resolved partition layout
            partition: Partition number to read

        Returns:
            str: The version label or "unknown" if it cannot be read
        """
        if partition == layout.running:
            try:
                return self.get_running_version()
            except VersionNotFound as e:
                log.warning(f"Could not read running version: {e}")
                return constants.UNKNOWN_VERSION

        device = self.partition_device(layout.root_device, partition)
        try:
            with self.mount_service.temporary_mount(
                device, self.mount_point_for(partition)
            ) as mount_point:
                return read_version(mount_point)
        except (MountError, VersionNotFound) as e:
            log.warning(f"Could not read version of partition {partition}: {e}")
            return constants.UNKNOWN_VERSION
