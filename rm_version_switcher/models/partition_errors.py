class PartitionError(Exception):
    """Raised when there's an error working with the boot partitions"""

    def __init__(self, error_msg: str):
        super().__init__(error_msg)
        self.error_msg = error_msg


class ResolutionError(PartitionError):
    """Raised when the running or next-boot partition cannot be determined"""


class SwitchError(PartitionError):
    """Raised when a firmware, sysfs or mmc write fails during a boot switch"""


class MountError(PartitionError):
    """Raised when a partition cannot be mounted"""


class VersionNotFound(PartitionError):
    """Raised when no version label is found below a filesystem root"""


class InvalidPartitionNumber(PartitionError, ValueError):
    """Raised when a parsed or supplied partition number is not 2 or 3"""

    def __init__(self, partition, error_msg: str = None):
        super().__init__(error_msg or f"Invalid partition number: {partition}")
        self.partition = partition
