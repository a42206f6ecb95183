"""
Constants for the GCM message document.

Wire keys are the field names of the JSON document accepted by the
messaging backend's send endpoint.
"""

# Addressing
TO = "to"
REGISTRATION_IDS = "registration_ids"

# Delivery options
COLLAPSE_KEY = "collapse_key"
TIME_TO_LIVE = "time_to_live"
DRY_RUN = "dry_run"
DELAY_WHILE_IDLE = "delay_while_idle"
RESTRICTED_PACKAGE_NAME = "restricted_package_name"

# Payload
DATA = "data"
NOTIFICATION = "notification"

# Option defaults
DEFAULT_COLLAPSE_KEY = ""
DEFAULT_TIME_TO_LIVE_SECONDS = 2419200  # 28 days
DEFAULT_DELAY_WHILE_IDLE = False
DEFAULT_RESTRICTED_PACKAGE_NAME = ""
DEFAULT_DRY_RUN = False
DEFAULT_CONTENT_AVAILABLE = True
DEFAULT_PRIORITY = "high"
