import pytest

from tezvault.devices import (
    LEDGER_DEVICES,
    LEDGER_NANO_S,
    LEDGER_NANO_X,
    find_model,
)


def test_find_model_case_insensitive():
    assert find_model("NANOX") is LEDGER_NANO_X
    assert find_model("nanos") is LEDGER_NANO_S


def test_find_model_unknown():
    with pytest.raises(ValueError, match="unknown model"):
        find_model("nanoZ")


def test_every_model_is_found_by_its_id():
    for device in LEDGER_DEVICES:
        assert find_model(device.id) is device


def test_every_model_is_found_by_its_upper_case_id():
    for device in LEDGER_DEVICES:
        assert find_model(device.id.upper()) is device


def test_nano_s_data():
    nano_s = find_model("nanoS")
    assert nano_s.product_name == "Ledger Nano S"
    assert nano_s.usb_only is True
    assert find_model("nanoX").usb_only is False