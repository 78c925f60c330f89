"""ID generators: random CUID2 document IDs and deterministic IDs for unique keys."""

import uuid

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

# Namespace for IDs derived from natural keys (email, package name, ...).
_KEY_NAMESPACE = uuid.UUID("8f5b3c1e-4d0a-5e7b-9a61-2c3d4e5f6a7b")


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def key_id(kind: str, *parts: str) -> str:
    """Return a stable document ID for a natural key.

    Parts are case-folded and stripped, so "A@x.com" and "a@x.com " map to the
    same ID. Creating a document under this ID with a must-not-exist
    precondition enforces uniqueness of the key.

    Args:
        kind: Key family (e.g. "user", "affiliation").
        parts: Key components in a fixed order.

    Returns:
        Hex UUIDv5 string (32 chars, valid as a Firestore document ID).
    """
    name = "|".join([kind, *(p.strip().casefold() for p in parts)])
    return uuid.uuid5(_KEY_NAMESPACE, name).hex
