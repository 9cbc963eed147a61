"""Cache key builders. Single place for key format (DRY).

Namespaces must not contain CACHE_KEY_SEP: the first separator then always
ends the namespace, so distinct (namespace, key) pairs never collide as long
as str(key) is unambiguous for the key type.
"""

from typing import Any

from cachedrepo.core.constants import CACHE_KEY_SEP


def validate_namespace(namespace: str) -> str:
    """Return namespace unchanged, or raise ValueError if unusable.

    Args:
        namespace: Entity namespace (e.g. 'article', 'billing.invoice').

    Raises:
        ValueError: If namespace is empty or contains CACHE_KEY_SEP.
    """
    if not namespace:
        raise ValueError("Cache namespace must be a non-empty string")
    if CACHE_KEY_SEP in namespace:
        raise ValueError(
            f"Cache namespace {namespace!r} must not contain separator {CACHE_KEY_SEP!r}"
        )
    return namespace


def qualified_namespace(namespace: str, prefix: str = "") -> str:
    """Join an optional deployment prefix to a namespace with '.'.

    Keeps the separator out of the namespace so key derivation stays injective.
    """
    validate_namespace(namespace)
    if not prefix:
        return namespace
    return validate_namespace(f"{prefix}.{namespace}")


def entity_cache_key(namespace: str, key: Any) -> str:
    """Cache key for an entity by namespace and key."""
    validate_namespace(namespace)
    return f"{namespace}{CACHE_KEY_SEP}{key}"
