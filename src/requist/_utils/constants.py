# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"

# Content types
TEXT_CONTENT_TYPE = "text/plain"
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Transport
DEFAULT_TIMEOUT = 4.0
DEFAULT_MAX_CONNECTIONS = 100
DEFAULT_MAX_KEEPALIVE_CONNECTIONS = 10
DEFAULT_KEEPALIVE_EXPIRY = 90.0

VALID_SCHEMES = ("http", "https")

# Environment variables
ENV_TIMEOUT = "REQUIST_TIMEOUT"
ENV_DISABLE_SSL_VERIFY = "REQUIST_DISABLE_SSL_VERIFY"
ENV_DEBUG = "REQUIST_DEBUG"
