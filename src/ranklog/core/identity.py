"""Identity utilities for deterministic fingerprints.

- record_set_fingerprint: order-independent digest of a record-id set
"""

import hashlib
from collections.abc import Iterable


def canonical_id_string(record_ids: Iterable[int]) -> str:
    """Build the canonical string for a set of record ids.

    Ids are de-duplicated and sorted numerically, then joined with a
    delimiter so that {1, 23} and {12, 3} never collide.

    Args:
        record_ids: Record ids in any order.

    Returns:
        Delimited string, e.g. "1|2|3". Empty string for no ids.
    """
    return "|".join(str(record_id) for record_id in sorted({int(r) for r in record_ids}))


def record_set_fingerprint(record_ids: Iterable[int]) -> str:
    """Compute fingerprint of a record-id set.

    fingerprint = sha256(canonical_id_string(record_ids))

    Args:
        record_ids: Record ids in any order.

    Returns:
        64-character hex string (SHA256)
    """
    return hashlib.sha256(canonical_id_string(record_ids).encode("utf-8")).hexdigest()
