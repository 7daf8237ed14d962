"""HTTP constants for the service layer.

Centralizes status ranges and defaults shared by the composer, classifier
and transport.
"""

# Success range is half-open: 200 <= status < 299
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 299

# Default request timeout (seconds)
DEFAULT_TIMEOUT_SECONDS = 15.0

# Body encodings
JSON_CONTENT_TYPE = "application/json"

# Default text encoding for response bodies
DEFAULT_TEXT_ENCODING = "utf-8"

CONTENT_TYPE_HEADER = "Content-Type"
USER_AGENT_HEADER = "User-Agent"
