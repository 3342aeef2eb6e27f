"""Internal constants shared across the library."""

DEFAULT_BROKER_URL = "tcp://broker.hivemq.com:1883"
DEFAULT_BROKER_PORT = 1883
DEFAULT_TOPIC_PREFIX = "tics/grupo1/esp32/tele"
DEFAULT_CLIENT_ID_PREFIX = "pytics"

ALARM_SMOKE_SUFFIX = "alarmSmoke"
RSSI_SUFFIX = "rssi"
BRACELET_NEAR_SUFFIX = "braceletNear"

#: Reserved "no data observed yet" value for integer signals.
UNKNOWN = -1

# ------------------------------------------------------------------
# Decode fallbacks for malformed payloads
# ------------------------------------------------------------------

ALARM_FALLBACK = 0
PROXIMITY_FALLBACK = 0
SIGNAL_STRENGTH_FALLBACK = UNKNOWN

# ------------------------------------------------------------------
# Proximity / distance model
# ------------------------------------------------------------------

#: Readings strictly above this value (dBm) count as "near".
NEAR_THRESHOLD_DBM = -60
#: Assumed signal strength at 1 meter (dBm).
TX_POWER_DBM = -52
#: Environment factor of the log-distance path-loss model.
PATH_LOSS_EXPONENT = 5.65

#: (lower bound exclusive in dBm, distance in meters), strongest band first.
DEFAULT_DISTANCE_BANDS: tuple[tuple[int, float], ...] = (
    (-50, 0.5),
    (-60, 1.0),
    (-70, 3.0),
    (-80, 6.0),
)
FARTHEST_BAND_M = 10.0

# ------------------------------------------------------------------
# Notification identifiers (stable per alert kind)
# ------------------------------------------------------------------

SMOKE_NOTIFICATION_ID = 2
PROXIMITY_NOTIFICATION_ID = 3
