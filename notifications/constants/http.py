"""HTTP and authorization constants."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"

# OAuth2 scopes
USER_SCOPE = "notification:user"
ADMIN_SCOPE = "notification:admin"

# Pagination
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Bulk operations
MAX_BULK_IDS = 100
