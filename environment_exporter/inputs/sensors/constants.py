# BME280 responds on 0x76 (SDO to GND) or 0x77 (SDO to VDD).
BME280_I2C_ADDRESSES = (0x76, 0x77)
DEFAULT_BME280_ADDRESS = 0x76

# adafruit_bme280 reports pressure in hPa.
PASCALS_PER_HECTOPASCAL = 100.0
