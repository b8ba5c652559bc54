import os
from contextlib import contextmanager

from rm_version_switcher import constants
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.models.partition_errors import MountError
from rm_version_switcher.models.runcommand_error import RunCommandError
from rm_version_switcher.utils.general import run_command

log = get_logger(__name__)


class MountService:
    """
    Mounts partitions at scratch mount points.
    """

    def mount_partition(
        self, device: str, mount_point: str, read_only: bool = True
    ) -> None:
        """
        Mount a partition.

        Args:
            device: Device path to mount
            mount_point: Directory to mount to
            read_only: Mount with "-o ro"

        Raises:
            MountError: If the mount command fails
        """
        cmd = [constants.MOUNT_CMD]
        if read_only:
            cmd += ["-o", "ro"]
        cmd += [device, mount_point]

        try:
            run_command(cmd)
        except (RunCommandError, OSError) as e:
            log.error(f"Error mounting {device} to {mount_point}: {e}")
            raise MountError(f"Failed to mount {device}: {e}") from e

        log.debug(f"Mounted {device} to {mount_point}")

    def unmount_partition(self, mount_point: str) -> bool:
        """
        Unmount a partition.

        Args:
            mount_point: Directory to unmount

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            run_command([constants.UMOUNT_CMD, mount_point])
            log.debug(f"Unmounted {mount_point}")
            return True
        except (RunCommandError, OSError) as e:
            log.warning(f"Error unmounting {mount_point}: {e}")
            return False

    @contextmanager
    def temporary_mount(self, device: str, mount_point: str):
        """
        Mount a device read-only for the duration of the block.

        The mount point directory is created first. The mount and the
        directory are released on every exit path.

        Yields:
            str: The mount point
        """
        try:
            os.makedirs(mount_point, mode=0o755, exist_ok=True)
        except OSError as e:
            raise MountError(f"Failed to create mount point {mount_point}: {e}") from e

        mounted = False
        try:
            self.mount_partition(device, mount_point, read_only=True)
            mounted = True
            yield mount_point
        finally:
            if mounted:
                self.unmount_partition(mount_point)
            try:
                os.rmdir(mount_point)
            except OSError as e:
                log.warning(f"Could not remove mount point {mount_point}: {e}")
