#!/usr/bin/env python3

import argparse
import sys

from rm_version_switcher import constants
from rm_version_switcher.__version__ import __version__
from rm_version_switcher.cli.cli_utils import (
    BLUE,
    GREEN,
    GREY,
    YELLOW,
    colorize,
    confirm,
    echo_debug,
    echo_error,
    echo_status,
    echo_warning,
)
from rm_version_switcher.core.config import settings
from rm_version_switcher.core.logging import configure_logging, get_logger
from rm_version_switcher.models.partition_errors import (
    InvalidPartitionNumber,
    ResolutionError,
    SwitchError,
)
from rm_version_switcher.schemas.partitions.partitions import SystemInfo
from rm_version_switcher.services.partitions.dry_run_service import DryRunStore
from rm_version_switcher.services.partitions.switch_service import BootSwitchService
from rm_version_switcher.services.partitions.system_state_service import (
    SystemStateService,
)

log = get_logger(__name__)

WIDTH = 50


def _partition_lines(info: SystemInfo, color: bool) -> list:
    """Partition A is p2 and partition B is p3 regardless of which is running."""
    partitions = [info.partition(number) for number in constants.PARTITIONS]
    bases = [f"Partition  {p.label}: {p.version}" for p in partitions]
    width = max(len(base) for base in bases)

    lines = []
    for partition, base in zip(partitions, bases):
        version = partition.version
        tags = ""
        if partition.is_active:
            tags += colorize(" [ACTIVE]", GREEN) if color else " [ACTIVE]"
        if partition.is_next_boot:
            tag_color = GREEN if partition.is_active else YELLOW
            tags += colorize(" [NEXT BOOT]", tag_color) if color else " [NEXT BOOT]"
        if color:
            version = colorize(version, GREEN if partition.is_active else BLUE)
        padding = " " * (width - len(base))
        lines.append(f"Partition  {partition.label}: {version}{padding}{tags}")
    return lines


def build_system_info_display(info: SystemInfo) -> str:
    """Plain text summary of the partitions."""
    lines = [constants.DISPLAY_TITLE, ""]
    lines += _partition_lines(info, color=False)
    return "\n".join(lines)


def display_system_info(info: SystemInfo) -> None:
    border = colorize("-" * WIDTH, GREY)
    print(border)
    print(constants.DISPLAY_TITLE.center(WIDTH))
    print(border)
    for line in _partition_lines(info, color=True):
        print(f" {line}")
    print(border)


def select_partition(info: SystemInfo) -> int:
    """Numbered selector, defaulting to the current next-boot partition."""
    options = [info.partition(number) for number in constants.PARTITIONS]
    default = next(i for i, p in enumerate(options, 1) if p.number == info.next_boot)

    print("\nSelect Next Boot Partition")
    for i, partition in enumerate(options, 1):
        marker = ">" if i == default else " "
        print(f" {marker} {i}) Partition {partition.label}: {partition.version}")

    while True:
        response = input(f"\nChoice [{default}]: ").strip()
        if not response:
            return options[default - 1].number
        if response in ("1", "2"):
            return options[int(response) - 1].number
        print("Please enter 1 or 2")


def handle_reboot_decision(
    should_reboot: bool, selected_boot: int, info: SystemInfo, switcher, dry_run: bool
) -> None:
    selected_version = info.version_of(selected_boot)

    if not should_reboot:
        print(f"Version will switch to {selected_version} at the next reboot.")
        return

    if dry_run:
        print(f"[DRY RUN] Would reboot now to version {selected_version}")
        return

    print(f"Rebooting now to version {selected_version}...")
    switcher.reboot()


def run_interactive(info: SystemInfo, state_service, switcher, dry_run: bool) -> int:
    if not confirm("Change next boot partition?"):
        return 0

    selected_boot = select_partition(info)

    if selected_boot == info.next_boot:
        print(
            f"No changes needed. Partition {selected_boot} is already set to boot next."
        )
        return 0

    version = info.version_of(selected_boot)
    if dry_run:
        print(f"[DRY RUN] Setting next boot to version {version} (partition {selected_boot})")
    else:
        echo_status(f"Setting next boot to version {version} (partition {selected_boot})...")

    switcher.switch_boot(selected_boot, info.next_boot)

    if dry_run:
        print(f"Saved boot partition {selected_boot} to {switcher.path}")
    else:
        echo_status(
            f"Successfully set next boot to version {version} (partition {selected_boot})"
        )

    try:
        updated_info = state_service.snapshot()
    except ResolutionError as e:
        echo_error(f"Failed to refresh system info: {e}")

    print()
    display_system_info(updated_info)

    should_reboot = confirm("Reboot now?")
    handle_reboot_decision(should_reboot, selected_boot, updated_info, switcher, dry_run)
    return 0


def setup_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show and switch the next boot partition of a reMarkable device"
    )
    parser.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        default=False,
        help="Enable dry run mode for testing",
    )
    parser.add_argument(
        "--show-only",
        dest="show_only",
        action="store_true",
        default=False,
        help="Only display current partition info, don't show selector",
    )
    parser.add_argument(
        "--reset-dry-run",
        dest="reset_dry_run",
        action="store_true",
        default=False,
        help="Reset dry run state to defaults",
    )
    parser.add_argument(
        "--debug",
        dest="debug",
        action="store_true",
        default=False,
        help=f"Enable debug logging to {settings.DEBUG_LOG_FILE}",
    )
    parser.add_argument(
        "--version", "-V", action="version", version=f"{__version__}"
    )
    return parser


def main(argv=None) -> int:
    """Main entry point for the script."""
    args = setup_parser().parse_args(argv)

    if args.reset_dry_run:
        DryRunStore().reset()
        print("Reset dry run state to defaults")
        return 0

    configure_logging(debug_mode=args.debug)
    if args.debug:
        echo_debug(f"Logging to {settings.DEBUG_LOG_FILE}")

    if args.dry_run:
        state_service = DryRunStore()
        switcher = state_service
    else:
        state_service = SystemStateService()
        switcher = BootSwitchService()

    try:
        info = state_service.snapshot()
    except ResolutionError as e:
        log.debug(f"Failed to get system info: {e}")
        echo_error(f"Failed to get system info: {e}")

    display_system_info(info)
    for partition in (info.active, info.fallback):
        if partition.version == constants.UNKNOWN_VERSION:
            echo_warning(
                f"Could not read the version installed on partition {partition.label}"
            )
    if args.show_only:
        return 0

    try:
        return run_interactive(info, state_service, switcher, args.dry_run)
    except (SwitchError, InvalidPartitionNumber, ResolutionError) as e:
        log.debug(f"Boot switch failed: {e}")
        echo_error(str(e))
    except (KeyboardInterrupt, EOFError):
        print("\nOperation cancelled.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
