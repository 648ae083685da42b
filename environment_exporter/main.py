"""
main.py

Bootstrap entry point for the environment exporter. Loads configuration, sets
up logging, opens the sensor, wires the collection bridge into a metrics
server and serves /metrics until interrupted.
"""

import logging
import sys

from environment_exporter.__version__ import __version__
from environment_exporter.collector import CollectionBridge
from environment_exporter.config_loader import ConfigLoader
from environment_exporter.exceptions import ConfigurationError, SensorInitError, SensorStopError
from environment_exporter.inputs.sensors.factory import SensorFactory
from environment_exporter.logging_setup import setup_logging
from environment_exporter.metrics.server import MetricsServer


def main() -> int:
    """
    Initialize and run the exporter.

    Startup failures (bad configuration, sensor not found) are logged and
    return a non-zero exit code. Once serving, failed sensor reads only
    affect the scrape they happen in.
    """
    bootstrap_logger = logging.getLogger("bootstrap")
    bootstrap_logger.setLevel(logging.INFO)
    if not bootstrap_logger.handlers:
        bootstrap_logger.addHandler(logging.StreamHandler())

    bootstrap_logger.info(f"Environment Exporter v{__version__}")

    try:
        config = ConfigLoader(logger=bootstrap_logger).as_dict()
    except ConfigurationError as e:
        bootstrap_logger.critical(f"Invalid configuration: {e}")
        return 2

    logger = setup_logging(
        log_dir=config["log_dir"],
        log_file_name="environment_exporter.log",
        log_level=config["log_level"],
    )

    try:
        sensor = SensorFactory().build(config["sensor"])
    except SensorInitError as e:
        logger.critical(f"Sensor initialisation failed: {e}")
        return 1
    except ConfigurationError as e:
        logger.critical(f"Invalid sensor configuration: {e}")
        return 2

    server = MetricsServer(
        port=config["metrics_port"],
        addr=config["metrics_addr"],
        failure_policy=config["failure_policy"],
    )

    exit_code = 0
    try:
        bridge = CollectionBridge(
            sensor,
            prefix=config["metrics_prefix"],
            sense_timeout=config["sense_timeout"],
        )
        server.register(bridge)
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
    except OSError as e:
        logger.critical(
            f"Cannot listen on {config['metrics_addr']}:{config['metrics_port']}: {e}"
        )
        exit_code = 1
    finally:
        server.stop()
        try:
            sensor.close()
        except SensorStopError as e:
            logger.warning(f"Sensor did not close cleanly: {e}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
