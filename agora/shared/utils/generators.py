"""ID generators: UUIDs for people and communities, document ids for records."""

import os
import time
import uuid


def generate_uuid() -> str:
    """Generate a random UUID4 in canonical string form."""
    return str(uuid.uuid4())


def generate_document_id() -> str:
    """Generate a 24-hex document id (4-byte big-endian seconds + 8 random bytes).

    Ids sort roughly by creation time, like the document ids the posts and
    subscriptions modules have always used.

    Returns:
        A new lowercase 24-character hex string.
    """
    seconds = int(time.time()) & 0xFFFFFFFF
    return seconds.to_bytes(4, "big").hex() + os.urandom(8).hex()
