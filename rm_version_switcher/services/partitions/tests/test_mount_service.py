import os
from unittest.mock import call, patch

import pytest

from rm_version_switcher.models.command_result import CommandResult
from rm_version_switcher.models.partition_errors import MountError
from rm_version_switcher.models.runcommand_error import RunCommandError
from rm_version_switcher.services.partitions.mount_service import MountService

MODULE = "rm_version_switcher.services.partitions.mount_service"


@patch(f"{MODULE}.run_command")
def test_mount_partition_read_only(mock_run_command):
    mock_run_command.return_value = CommandResult("", "", 0)

    MountService().mount_partition("/dev/mmcblk2p3", "/tmp/mount_p3")

    mock_run_command.assert_called_once_with(
        ["mount", "-o", "ro", "/dev/mmcblk2p3", "/tmp/mount_p3"]
    )


@patch(f"{MODULE}.run_command")
def test_mount_partition_failure(mock_run_command):
    mock_run_command.side_effect = RunCommandError("wrong fs type", 32)

    with pytest.raises(MountError):
        MountService().mount_partition("/dev/mmcblk2p3", "/tmp/mount_p3")


@patch(f"{MODULE}.run_command")
def test_unmount_failure_returns_false(mock_run_command):
    mock_run_command.side_effect = RunCommandError("target is busy", 32)

    assert MountService().unmount_partition("/tmp/mount_p3") is False


@patch(f"{MODULE}.run_command")
def test_temporary_mount_cleans_up(mock_run_command, tmp_path):
    mock_run_command.return_value = CommandResult("", "", 0)
    mount_point = str(tmp_path / "mount_p3")

    with MountService().temporary_mount("/dev/mmcblk2p3", mount_point) as path:
        assert path == mount_point
        assert os.path.isdir(mount_point)

    assert mock_run_command.call_args_list == [
        call(["mount", "-o", "ro", "/dev/mmcblk2p3", mount_point]),
        call(["umount", mount_point]),
    ]
    assert not os.path.exists(mount_point)


@patch(f"{MODULE}.run_command")
def test_temporary_mount_cleans_up_on_error(mock_run_command, tmp_path):
    mock_run_command.return_value = CommandResult("", "", 0)
    mount_point = str(tmp_path / "mount_p2")

    with pytest.raises(RuntimeError):
        with MountService().temporary_mount("/dev/mmcblk2p2", mount_point):
            raise RuntimeError("read failed")

    assert mock_run_command.call_args_list[-1] == call(["umount", mount_point])
    assert not os.path.exists(mount_point)


@patch(f"{MODULE}.run_command")
def test_temporary_mount_failure_skips_unmount(mock_run_command, tmp_path):
    mock_run_command.side_effect = RunCommandError("wrong fs type", 32)
    mount_point = str(tmp_path / "mount_p2")

    with pytest.raises(MountError):
        with MountService().temporary_mount("/dev/mmcblk2p2", mount_point):
            pass

    mock_run_command.assert_called_once()
    assert not os.path.exists(mount_point)
