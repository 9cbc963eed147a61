"""Core constants: cache key structure.

Single source of truth for cache key structure (DRY).
"""

# Delimiter between namespace and entity key
CACHE_KEY_SEP = ":"
