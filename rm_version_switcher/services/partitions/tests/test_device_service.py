import pytest

from rm_version_switcher.schemas.partitions.partitions import DeviceFamily
from rm_version_switcher.services.partitions.device_service import DeviceService


@pytest.fixture
def device_service(tmp_path):
    service = DeviceService()
    service.DEVICE_MODEL_PATH = str(tmp_path / "model")
    return service


def test_get_device_model_strips_nul(device_service, tmp_path):
    (tmp_path / "model").write_bytes(b"reMarkable 2.0\x00")

    assert device_service.get_device_model() == "reMarkable 2.0"


def test_get_device_model_missing_file(device_service):
    assert device_service.get_device_model() == "Unknown"


@pytest.mark.parametrize(
    "model,expected",
    [
        ("reMarkable Ferrari\x00", DeviceFamily.NEXTGEN),
        ("reMarkable Chiappa", DeviceFamily.NEXTGEN),
        ("reMarkable 2.0", DeviceFamily.STANDARD),
        ("reMarkable 1.0", DeviceFamily.LEGACY),
        ("Ferrari", DeviceFamily.LEGACY),
    ],
)
def test_classify(device_service, tmp_path, model, expected):
    (tmp_path / "model").write_text(model)

    assert device_service.classify() == expected


def test_classify_unknown_model_is_legacy(device_service):
    assert device_service.classify() == DeviceFamily.LEGACY


def test_classify_undecodable_model(device_service, tmp_path):
    (tmp_path / "model").write_bytes(b"reMarkable Ferrari\xff\x00")

    assert device_service.classify() == DeviceFamily.NEXTGEN
