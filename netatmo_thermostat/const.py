"""Constants for the Netatmo thermostat exporter."""

# API endpoints
API_BASE = "https://api.netatmo.com"
ENDPOINT_HOMESDATA = "/api/homesdata"
ENDPOINT_HOMESTATUS = "/api/homestatus"

# Tokens expiring within this many seconds are treated as already expired
TOKEN_EXPIRY_DELTA = 10

METRIC_PREFIX = "netatmo_"

THERMOSTAT_LABELS = ("home_id", "home_name", "room_id", "room_name")

# Metric kind -> (metric name without prefix, help text)
THERMOSTAT_METRICS = {
    "temperature": (
        "thermostat_temperature",
        "Netatmo Energy measured room temperature in degrees Celsius.",
    ),
    "setpoint": (
        "thermostat_setpoint",
        "Netatmo Energy target setpoint temperature in degrees Celsius.",
    ),
    "boiler_status": (
        "thermostat_boiler_status",
        "Netatmo Energy boiler status (1=on, 0=off). "
        "Per-room when possibile, otherwise per-home.",
    ),
}

# Exporter defaults
DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_LISTEN_PORT = 9210
DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "INFO"
