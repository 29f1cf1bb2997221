"""Core constants: cache tag structure and shared literal values.

Single source of truth for cache tag and cache key formats (DRY). Used by
jobboard.infrastructure.cache.
"""

# Tag namespaces: global:<kind>, id:<kind>-<id>, <parentKind>:<parentId>-<kind>
CACHE_TAG_GLOBAL = "global"
CACHE_TAG_ID = "id"
CACHE_TAG_NAMESPACE_SEP = ":"
CACHE_TAG_SCOPE_SEP = "-"

# Redis keys backing the tag store
CACHE_KEY_TAG_VERSION = "tagver"
CACHE_KEY_TAG_PROFILES = "tagprofile"
CACHE_KEY_ENTRY = "tagged"
CACHE_KEY_SEP = ":"

# Fallback when an identity provider sends an empty first/last name
UNKNOWN_USER_NAME = "Unknown User"

# Svix-style webhook signing headers
WEBHOOK_ID_HEADER = "svix-id"
WEBHOOK_TIMESTAMP_HEADER = "svix-timestamp"
WEBHOOK_SIGNATURE_HEADER = "svix-signature"
WEBHOOK_SECRET_PREFIX = "whsec_"
WEBHOOK_SIGNATURE_VERSION = "v1"
