"""Constants for the Motiv Awake integration."""
from datetime import timedelta

DOMAIN = "motiv_awake"

# Host registration keys
PACKAGE_NAME = "motiv-awake"
PLUGIN_NAME = "MotivAwake"

# Host events
EVENT_DID_FINISH_LAUNCHING = "didFinishLaunching"

# Configuration Keys
CONF_ACCOUNT = "account"
CONF_USER_ID = "userId"
CONF_EMAIL = "email"
CONF_SESSION_TOKEN = "sessionToken"
CONF_SESSION_EXPIRY = "sessionExpiry"

# Defaults
DEFAULT_API_URL = "https://api.mymotiv.com/v1"
REQUEST_TIMEOUT = 10
SCAN_INTERVAL = timedelta(minutes=1)

# --- SENSOR TYPES ---
SENSOR_AWAKE = "awake"
SENSOR_TYPES = [SENSOR_AWAKE]

# Accessory information
MANUFACTURER = "Motiv Sensors"

RENEW_HINT = 'Run "motiv-cli login <email>" to renew the session'
