"""Internal constants shared across the library."""

from uuid import UUID

#: Service UUID advertised by every SwitchBot product.
SWITCHBOT_SERVICE_UUID = UUID("cba20d00-224d-11e6-9fb8-0002a5d5c51b")

# ------------------------------------------------------------------
# Service data layout
# ------------------------------------------------------------------

METER_TYPE = 0x54
CURTAIN_TYPE = 0x63

METER_MIN_LENGTH = 6
CURTAIN_MIN_LENGTH = 5

# High bit carries an "uncertain/in-progress" status flag on some firmware.
STATUS_BIT_MASK = 0x7F

# ------------------------------------------------------------------
# Timing defaults (seconds)
# ------------------------------------------------------------------

DEFAULT_STALE_AFTER: float = 60.0
DEFAULT_SCAN_WINDOW: float = 11.0
DEFAULT_SCAN_INTERVAL: float = 60.0

DEFAULT_LISTEN = ":9012"
METRICS_NAMESPACE = "switchbot"
DEVICE_LABEL = "hw"
