import os

from rm_version_switcher import constants
from rm_version_switcher.core.logging import get_logger
from rm_version_switcher.schemas.partitions.partitions import DeviceFamily

log = get_logger(__name__)


class DeviceService:
    """
    Handles device identification.

    The family decides which low-level interfaces hold the partition state:
    reMarkable 1 and 2 keep it in the u-boot environment, the Paper Pro
    family manages it through swupdate and sysfs/mmc.
    """

    DEVICE_MODEL_PATH = constants.DEVICE_MODEL_FILE

    NEXTGEN_MODELS = constants.NEXTGEN_MODELS

    def get_device_model(self) -> str:
        """
        Get the device model string.

        Returns:
            str: Device model string, or "Unknown" if not available
        """
        try:
            if os.path.exists(self.DEVICE_MODEL_PATH):
                with open(self.DEVICE_MODEL_PATH, "r", errors="replace") as f:
                    # device-tree strings are NUL terminated
                    return f.read().strip().strip("\x00").strip()
            return "Unknown"
        except OSError:
            log.error("Error reading device model", exc_info=True)
            return "Unknown"

    def classify(self) -> DeviceFamily:
        """
        Determine which hardware family the running device belongs to.

        Returns:
            DeviceFamily: NEXTGEN for known Paper Pro models, STANDARD for
            reMarkable 2, LEGACY for anything else
        """
        model = self.get_device_model()

        if any(f"reMarkable {name}" in model for name in self.NEXTGEN_MODELS):
            family = DeviceFamily.NEXTGEN
        elif constants.STANDARD_MODEL_MARKER in model:
            family = DeviceFamily.STANDARD
        else:
            family = DeviceFamily.LEGACY

        log.debug(f"Device model '{model}' classified as {family.value}")
        return family
