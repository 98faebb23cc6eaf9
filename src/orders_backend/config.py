import os

# Suggestion list cap
MAX_SUGGESTIONS: int = 20

# Bank thresholds (strictly greater than)
MIN_PHRASE_LEN: int = 3
MIN_WORD_LEN: int = 2

# Characters that close the word being typed
SEPARATORS: str = ",;:"

# /* ~~~ delay before a blurred field hides its list, so a click can land ~~~ */
BLUR_GRACE_MS: int = 150

# Storage keys (kept identical to the browser build so exported data loads as-is)
PRESETS_KEY: str = "autocomplete-presets"
ORDERS_KEY: str = "orders"

# Store DSN: "memory://" or "json:///path/to/data.json"
DEFAULT_DSN: str = os.environ.get("ORDERS_DB", "memory://")

# Defaults for a freshly created order item
DEFAULT_STATUTES: str = "11"
