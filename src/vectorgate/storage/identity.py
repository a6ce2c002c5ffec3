"""
Point identity mapping.

Callers address points with opaque string IDs (``mem_1_a``,
``doc_7_42_0``) while the engine keys points by unsigned 64-bit integers.
The mapping is a pure function of the string, so it gives the same answer
in every process and after every restart.
"""

import hashlib

NATIVE_ID_BYTES = 8


def to_native_id(string_id: str) -> int:
    """
    Map a caller-supplied string ID to the engine's native point ID.

    Uses an 8-byte BLAKE2b digest of the UTF-8 encoding, read as a
    big-endian unsigned integer. Total over all strings, including "".

    Args:
        string_id: Caller-visible point identifier

    Returns:
        int: Native ID in ``[0, 2**64)``
    """
    digest = hashlib.blake2b(
        string_id.encode("utf-8"), digest_size=NATIVE_ID_BYTES
    ).digest()
    return int.from_bytes(digest, "big")
