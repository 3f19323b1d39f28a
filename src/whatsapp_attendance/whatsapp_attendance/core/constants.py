"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_RECENT_MESSAGES = 10
DEFAULT_PENDING_BATCH = 100
DEFAULT_ZAPI_TIMEOUT_SECONDS = 10.0
DEFAULT_ZAPI_BASE_URL = "https://api.z-api.io"

ENFORCE_TRANSITIONS_KEY = "attendance.enforce_transitions"
AUTO_REPLY_KEY = "whatsapp.auto_reply"
