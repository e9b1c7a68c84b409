"""Hash utilities for Kit."""

import hashlib


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def frame(kind: str, body: bytes) -> bytes:
    """Prefix body with its '<kind> <size>\\0' object header."""
    return f"{kind} {len(body)}\0".encode() + body

