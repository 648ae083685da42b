PACKAGE_LOGGER_NAME = "environment_exporter"
