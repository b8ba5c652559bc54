# Device identity
DEVICE_MODEL_FILE: str = "/proc/device-tree/model"
NEXTGEN_MODELS: list = ["Ferrari", "Chiappa"]
STANDARD_MODEL_MARKER: str = "reMarkable 2"

# Version label sources, relative to a filesystem root
UPDATE_CONF_FILE: str = "usr/share/remarkable/update.conf"
UPDATE_CONF_KEY: str = "RELEASE_VERSION="
OS_RELEASE_FILE: str = "etc/os-release"
OS_RELEASE_KEY: str = "IMG_VERSION="
UNKNOWN_VERSION: str = "unknown"

# Partition topology
PARTITIONS: tuple = (2, 3)
PARTITION_LABELS: dict = {2: "A", 3: "B"}

# Linux programs
ROOTDEV_CMD: str = "rootdev"
FW_PRINTENV_CMD: str = "fw_printenv"
FW_SETENV_CMD: str = "fw_setenv"
SWUPDATE_CMD: str = "swupdate"
MMC_CMD: str = "mmc"
MOUNT_CMD: str = "mount"
UMOUNT_CMD: str = "umount"
REBOOT_CMD: str = "reboot"

# Firmware environment
ACTIVE_PARTITION_VAR: str = "active_partition"

# NextGen sysfs attributes
BOOT_PART_FILE: str = "/sys/bus/mmc/devices/mmc0:0001/boot_part"
ROOT_PART_FILE: str = "/sys/devices/platform/lpgpr/root_part"

# NextGen images at or above this version boot through the mmc boot partition register
MMC_BOOT_VERSION: str = "3.22"
# assumed when the running NextGen version cannot be read
NEXTGEN_FALLBACK_RESOLVE_VERSION: str = "3.20"
NEXTGEN_FALLBACK_SWITCH_VERSION: str = "3.22"

# boot_part value -> partition
BOOT_PART_VALUES: dict = {"1": 2, "2": 3}
# root_part letter -> partition
ROOT_PART_VALUES: dict = {"a": 2, "b": 3}

# partition -> (mmc boot partition slot, boot device)
MMC_BOOT_TARGETS: dict = {
    2: ("1", "/dev/mmcblk0boot0"),
    3: ("2", "/dev/mmcblk0boot1"),
}

# Dry run layout
DRY_RUN_ACTIVE_PARTITION: int = 3
DRY_RUN_FALLBACK_PARTITION: int = 2
DRY_RUN_DEFAULT_NEXT_BOOT: int = 3
DRY_RUN_VERSIONS: dict = {3: "3.20.0.92", 2: "3.18.2.3"}

PROJECT_NAME: str = "rm-version-switcher"
DISPLAY_TITLE: str = "reMarkable OS Version Switcher"
