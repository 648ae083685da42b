"""
conftest.py

Session-wide hardware module stubs for unit tests.

Adafruit Blinka's `board` module refuses to import anywhere but on a
supported single-board computer, which makes the BME280 driver unimportable
on a development machine or CI runner. The stubs below are registered via
sys.modules.setdefault at module level, before pytest imports any test
module, so every import during collection sees the same objects.

adafruit_bme280 is stubbed as a real module object (not a MagicMock) with a
`basic` submodule attribute, because the driver does
`from adafruit_bme280 import basic`. Tests that need different device
behaviour monkeypatch `Adafruit_BME280_I2C` on that submodule; monkeypatch
restores it after each test.
"""

import sys
import types
from unittest.mock import MagicMock


# ── adafruit_bme280 ──────────────────────────────────────────────────────────
# A device that answers with fixed values: 23.45 C, 1013.25 hPa, 45.2 %RH.

class _FakeBME280Device:
    def __init__(self, i2c, address=0x77):
        self.i2c = i2c
        self.address = address

    @property
    def temperature(self):
        return 23.45

    @property
    def pressure(self):
        return 1013.25

    @property
    def humidity(self):
        return 45.2


_fake_bme280_basic = types.ModuleType("adafruit_bme280.basic")
_fake_bme280_basic.Adafruit_BME280_I2C = _FakeBME280Device

_fake_bme280 = types.ModuleType("adafruit_bme280")
_fake_bme280.basic = _fake_bme280_basic


# ── Apply stubs ───────────────────────────────────────────────────────────────

sys.modules.setdefault("board", MagicMock())           # Blinka refuses non-SBC hosts
sys.modules.setdefault("busio", MagicMock())
sys.modules.setdefault("adafruit_bme280", _fake_bme280)
sys.modules.setdefault("adafruit_bme280.basic", _fake_bme280_basic)
