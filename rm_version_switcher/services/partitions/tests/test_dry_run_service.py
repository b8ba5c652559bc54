import pytest

from rm_version_switcher.models.partition_errors import (
    InvalidPartitionNumber,
    SwitchError,
)
from rm_version_switcher.schemas.partitions.partitions import DeviceFamily
from rm_version_switcher.services.partitions.dry_run_service import DryRunStore


@pytest.fixture
def store(tmp_path):
    return DryRunStore(str(tmp_path / "dry-run-boot.txt"))


def test_defaults_without_file(store):
    info = store.snapshot()

    assert info.active.number == 3
    assert info.active.version == "3.20.0.92"
    assert info.fallback.number == 2
    assert info.fallback.version == "3.18.2.3"
    assert info.next_boot == 3
    assert info.active.is_next_boot
    assert info.device_family == DeviceFamily.STANDARD


@pytest.mark.parametrize("target", [2, 3])
def test_switch_boot_persists(store, tmp_path, target):
    store.switch_boot(target, 3)

    assert (tmp_path / "dry-run-boot.txt").read_text() == str(target)
    info = store.snapshot()
    assert info.next_boot == target
    assert info.partition(target).is_next_boot


def test_switch_to_fallback_keeps_active(store):
    store.switch_boot(2, 3)

    info = store.snapshot()
    assert info.active.number == 3
    assert not info.active.is_next_boot
    assert info.fallback.is_next_boot


@pytest.mark.parametrize("content", ["invalid", "5", "", "2.0"])
def test_invalid_content_defaults_to_3(store, tmp_path, content):
    (tmp_path / "dry-run-boot.txt").write_text(content)

    assert store.load_next_boot() == 3


def test_undecodable_content_defaults_to_3(store, tmp_path):
    (tmp_path / "dry-run-boot.txt").write_bytes(b"\xff")

    assert store.load_next_boot() == 3
    assert store.snapshot().next_boot == 3


def test_whitespace_is_tolerated(store, tmp_path):
    (tmp_path / "dry-run-boot.txt").write_text("2\n")

    assert store.load_next_boot() == 2


def test_invalid_target(store, tmp_path):
    with pytest.raises(InvalidPartitionNumber):
        store.switch_boot(4, 3)

    assert not (tmp_path / "dry-run-boot.txt").exists()


def test_write_failure(tmp_path):
    store = DryRunStore(str(tmp_path / "missing" / "dry-run-boot.txt"))

    with pytest.raises(SwitchError):
        store.switch_boot(2, 3)


def test_reset(store, tmp_path):
    store.switch_boot(2, 3)

    store.reset()

    assert not (tmp_path / "dry-run-boot.txt").exists()
    assert store.snapshot().next_boot == 3


def test_reset_without_file(store):
    store.reset()


def test_reboot_is_noop(store, tmp_path):
    store.reboot()

    assert list(tmp_path.iterdir()) == []
