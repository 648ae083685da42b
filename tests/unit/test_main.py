import logging
from unittest.mock import MagicMock, patch

# Hardware stubs (board, busio, adafruit_bme280) are set up in conftest.py
# before this module is collected.

from environment_exporter import main as main_module
from environment_exporter.exceptions import (
    InvalidConfigValueError,
    InvalidSensorConfigError,
    SensorStopError,
)
from environment_exporter.inputs.sensors.bme280 import BME280InitError


CONFIG = {
    "metrics_port": 9101,
    "metrics_addr": "127.0.0.1",
    "metrics_prefix": "sensors_1",
    "log_level": "INFO",
    "log_dir": "log",
    "sense_timeout": None,
    "failure_policy": "fail",
    "sensor": {"type": "bme280", "id": "bme280", "address": 0x76},
}


def _patches(config=CONFIG):
    loader = patch.object(main_module, "ConfigLoader")
    logging_setup = patch.object(main_module, "setup_logging", return_value=MagicMock(spec=logging.Logger))
    factory = patch.object(main_module, "SensorFactory")
    server = patch.object(main_module, "MetricsServer")
    return loader, logging_setup, factory, server


def test_main_wires_sensor_bridge_and_server():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup, factory as MockFactory, server as MockServer:
        MockLoader.return_value.as_dict.return_value = CONFIG
        sensor = MockFactory.return_value.build.return_value
        sensor.name = "BME280"

        assert main_module.main() == 0

    MockFactory.return_value.build.assert_called_once_with(CONFIG["sensor"])
    MockServer.assert_called_once_with(port=9101, addr="127.0.0.1", failure_policy="fail")
    bridge = MockServer.return_value.register.call_args[0][0]
    assert isinstance(bridge, main_module.CollectionBridge)
    assert [d.name for d in bridge.descriptors][0] == "sensors_1_temperature"
    MockServer.return_value.serve_forever.assert_called_once()
    MockServer.return_value.stop.assert_called_once()
    sensor.close.assert_called_once()


def test_keyboard_interrupt_shuts_down_cleanly():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup, factory as MockFactory, server as MockServer:
        MockLoader.return_value.as_dict.return_value = CONFIG
        MockServer.return_value.serve_forever.side_effect = KeyboardInterrupt
        sensor = MockFactory.return_value.build.return_value

        assert main_module.main() == 0

    MockServer.return_value.stop.assert_called_once()
    sensor.close.assert_called_once()


def test_sensor_close_failure_is_logged_not_raised():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup as mock_setup, factory as MockFactory, server:
        MockLoader.return_value.as_dict.return_value = CONFIG
        MockFactory.return_value.build.return_value.close.side_effect = SensorStopError("busy")

        assert main_module.main() == 0

    mock_setup.return_value.warning.assert_called_once()


def test_sensor_init_failure_aborts_startup():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup as mock_setup, factory as MockFactory, server as MockServer:
        MockLoader.return_value.as_dict.return_value = CONFIG
        MockFactory.return_value.build.side_effect = BME280InitError("no device at 0x76")

        assert main_module.main() == 1

    mock_setup.return_value.critical.assert_called_once()
    MockServer.assert_not_called()


def test_sensor_config_error_aborts_startup():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup, factory as MockFactory, server as MockServer:
        MockLoader.return_value.as_dict.return_value = CONFIG
        MockFactory.return_value.build.side_effect = InvalidSensorConfigError("bad address")

        assert main_module.main() == 2

    MockServer.assert_not_called()


def test_invalid_configuration_aborts_before_logging_setup():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup as mock_setup, factory as MockFactory, server:
        MockLoader.side_effect = InvalidConfigValueError("metrics_port")

        assert main_module.main() == 2

    mock_setup.assert_not_called()
    MockFactory.assert_not_called()


def test_port_in_use_exits_non_zero_and_closes_sensor():
    loader, logging_setup, factory, server = _patches()
    with loader as MockLoader, logging_setup as mock_setup, factory as MockFactory, server as MockServer:
        MockLoader.return_value.as_dict.return_value = CONFIG
        MockServer.return_value.serve_forever.side_effect = OSError(98, "Address already in use")
        sensor = MockFactory.return_value.build.return_value

        assert main_module.main() == 1

    mock_setup.return_value.critical.assert_called_once()
    assert "127.0.0.1:9101" in mock_setup.return_value.critical.call_args[0][0]
    MockServer.return_value.stop.assert_called_once()
    sensor.close.assert_called_once()
