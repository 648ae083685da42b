"""
config_loader.py

Load configuration from an optional JSON config file and environment variable
overrides. The loader validates every value the exporter uses and exposes a
merged configuration dictionary via as_dict().

Every key has a default, so the exporter starts without a config file; a
CONFIG_PATH that points at a missing file is still an error.

Classes:
    ConfigLoader

Usage:
    loader = ConfigLoader(logger)
    config = loader.as_dict()
"""

from __future__ import annotations

import os
import json
from pathlib import Path
from typing import Any, Dict, Optional

from environment_exporter.exceptions import (
    ConfigFileNotFoundError,
    InvalidConfigValueError,
    MissingConfigKeyError,
)
from environment_exporter.metrics.descriptors import METRIC_NAME_RE
from environment_exporter.metrics.server import FailurePolicy

ETC_CONFIG_PATH = Path("/etc/environment_exporter/config.json")
DEFAULT_CONFIG_FILENAME = "config.json"

DEFAULTS: Dict[str, Any] = {
    "metrics_port": 9101,
    "metrics_addr": "0.0.0.0",
    "metrics_prefix": "sensors_1",
    "log_level": "INFO",
    "log_dir": "log",
    "sense_timeout": None,
    "failure_policy": FailurePolicy.FAIL.value,
    "sensor": {"type": "bme280", "id": "bme280", "address": 0x76},
}

# Environment variable -> config key.
ENV_OVERRIDES = {
    "METRICS_PORT": "metrics_port",
    "METRICS_ADDR": "metrics_addr",
    "LOG_LEVEL": "log_level",
}

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _safe_log(logger, level: str, msg: str) -> None:
    """
    Log a message using the provided logger while tolerating a missing logger.
    """

    if logger is None:
        return
    fn = getattr(logger, level.lower(), None)
    if callable(fn):
        fn(msg)


def _load_json_config(path: Optional[Path], logger=None) -> Dict[str, Any]:
    """
    Load JSON configuration from the given file path.

    Returns an empty dict when no path was resolved.
    """
    if not path:
        return {}
    try:
        with open(path, "r") as file:  # <- builtins.open so tests can mock it
            data = json.load(file)
    except json.JSONDecodeError as e:
        _safe_log(logger, "error", f"ConfigLoader: invalid JSON in {path}: {e}")
        raise InvalidConfigValueError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        _safe_log(logger, "error", f"ConfigLoader: failed reading {path}: {e}")
        raise
    if not isinstance(data, dict):
        raise InvalidConfigValueError(f"Top level of {path} must be a JSON object")
    return data


class ConfigLoader:
    """
    Load and validate exporter configuration.

    Sources, later ones winning:
      1. built-in DEFAULTS
      2. config.json (CONFIG_PATH, /etc/environment_exporter, or ./config.json)
      3. environment variables METRICS_PORT, METRICS_ADDR, LOG_LEVEL

    JSON keys:
      - metrics_port (int 0..65535)
      - metrics_addr (str)
      - metrics_prefix (str, valid Prometheus name prefix)
      - log_level (str, default "INFO")
      - log_dir (str)
      - sense_timeout (positive number or null)
      - failure_policy ("fail" or "skip")
      - sensor (object with at least "type")
    """

    def __init__(self, logger):
        """
        Initialize the loader, resolve and read the config file, apply
        environment overrides and validate every value.

        Args:
            logger (Logger): Logger instance for diagnostic output.
        """

        self.logger = logger

        self.config_path = self._resolve_config_path()
        self.config = _load_json_config(self.config_path, self.logger)
        self.env = self._read_env_overrides()

        self.metrics_port = self._get_metrics_port()
        self.metrics_addr = self._get_metrics_addr()
        self.metrics_prefix = self._get_metrics_prefix()
        self.log_level = self._get_log_level()
        self.log_dir = self._get_log_dir()
        self.sense_timeout = self._get_sense_timeout()
        self.failure_policy = self._get_failure_policy()
        self.sensor = self._get_sensor()

    def as_dict(self) -> Dict[str, Any]:
        """
        Return the validated configuration dictionary.
        """
        merged: Dict[str, Any] = {
            "metrics_port": self.metrics_port,
            "metrics_addr": self.metrics_addr,
            "metrics_prefix": self.metrics_prefix,
            "log_level": self.log_level,
            "log_dir": self.log_dir,
            "sense_timeout": self.sense_timeout,
            "failure_policy": self.failure_policy,
            "sensor": dict(self.sensor),
        }

        _safe_log(self.logger, "info", f"ConfigLoader: keys loaded: {list(merged.keys())}")
        _safe_log(self.logger, "info", f"ConfigLoader: sensor type: {self.sensor.get('type')}")

        return merged

    # --- Sources ------------------------------------------------------------

    def _resolve_config_path(self) -> Optional[Path]:
        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            path = Path(env_path).expanduser().resolve()
            if path.is_file():
                _safe_log(self.logger, "info", f"ConfigLoader: using config from CONFIG_PATH env var: {path}")
                return path
            raise ConfigFileNotFoundError(f"CONFIG_PATH set but file does not exist: {path}")

        if ETC_CONFIG_PATH.is_file():
            _safe_log(self.logger, "info", f"ConfigLoader: using config from {ETC_CONFIG_PATH}")
            return ETC_CONFIG_PATH

        local_path = Path.cwd() / DEFAULT_CONFIG_FILENAME
        if local_path.is_file():
            _safe_log(self.logger, "warning", f"ConfigLoader: using local dev config at {local_path} (NOT /etc)")
            return local_path

        _safe_log(self.logger, "warning", "ConfigLoader: no config.json found, using defaults")
        return None

    def _read_env_overrides(self) -> Dict[str, str]:
        overrides = {}
        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value not in (None, ""):
                overrides[key] = value
        return overrides

    def _raw(self, key: str) -> Any:
        if key in self.env:
            return self.env[key]
        return self.config.get(key, DEFAULTS[key])

    def _invalid(self, key: str, value: Any, reason: str) -> InvalidConfigValueError:
        msg = f"Invalid {key}: {value!r} ({reason})"
        _safe_log(self.logger, "error", msg)
        return InvalidConfigValueError(msg)

    # --- Fields -------------------------------------------------------------

    def _get_metrics_port(self) -> int:
        """
        Returns:
            int: TCP port for the /metrics endpoint.

        Raises:
            InvalidConfigValueError: If the port is not an integer in 0..65535.
        """
        raw_value = self._raw("metrics_port")
        if isinstance(raw_value, bool):
            raise self._invalid("metrics_port", raw_value, "must be an integer")
        try:
            port = int(raw_value)
        except (ValueError, TypeError) as e:
            raise self._invalid("metrics_port", raw_value, "must be an integer") from e
        if not 0 <= port <= 65535:
            raise self._invalid("metrics_port", raw_value, "must be between 0 and 65535")
        return port

    def _get_metrics_addr(self) -> str:
        value = self._raw("metrics_addr")
        if not isinstance(value, str) or not value.strip():
            raise self._invalid("metrics_addr", value, "must be a non-empty string")
        return value.strip()

    def _get_metrics_prefix(self) -> str:
        """
        The prefix becomes part of every metric name, so it must be a valid
        Prometheus identifier ("sensors_1", not "sensors-1").
        """
        value = self._raw("metrics_prefix")
        if not isinstance(value, str) or not METRIC_NAME_RE.match(value):
            raise self._invalid("metrics_prefix", value, "must match [a-zA-Z_:][a-zA-Z0-9_:]*")
        return value

    def _get_log_level(self) -> str:
        value = self._raw("log_level")
        if not isinstance(value, str) or value.strip().upper() not in VALID_LOG_LEVELS:
            raise self._invalid("log_level", value, f"must be one of {', '.join(VALID_LOG_LEVELS)}")
        return value.strip().upper()

    def _get_log_dir(self) -> str:
        value = self._raw("log_dir")
        if not isinstance(value, str) or not value.strip():
            raise self._invalid("log_dir", value, "must be a non-empty string")
        return value

    def _get_sense_timeout(self) -> Optional[float]:
        """
        Returns:
            float | None: Deadline in seconds for one sense call, or None.
        """
        value = self._raw("sense_timeout")
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise self._invalid("sense_timeout", value, "must be a number of seconds or null")
        if value <= 0:
            raise self._invalid("sense_timeout", value, "must be greater than 0")
        return float(value)

    def _get_failure_policy(self) -> str:
        value = self._raw("failure_policy")
        try:
            return FailurePolicy(str(value).strip().lower()).value
        except ValueError as e:
            allowed = ", ".join(p.value for p in FailurePolicy)
            raise self._invalid("failure_policy", value, f"must be one of {allowed}") from e

    def _get_sensor(self) -> Dict[str, Any]:
        """
        Returns:
            dict: The sensor section, handed to SensorFactory.build().

        Raises:
            InvalidConfigValueError: If the section is not an object.
            MissingConfigKeyError: If the section has no "type".
        """
        value = self._raw("sensor")
        if not isinstance(value, dict):
            raise self._invalid("sensor", value, "must be an object")
        if "type" not in value:
            _safe_log(self.logger, "error", "Missing required config: sensor.type")
            raise MissingConfigKeyError("sensor.type")
        return dict(value)
