"""Integrity checks for signed report documents."""

from __future__ import annotations

import hashlib
import hmac
from typing import Optional, Union

from .models import GateResult, ReportStatus


def document_hash(data: bytes) -> str:
    """Return the SHA-256 hex digest recorded when a report is signed."""
    return hashlib.sha256(data).hexdigest()


def verify_integrity(
    status: Union[ReportStatus, str],
    stored_hash: Optional[str],
    document: Optional[bytes] = None,
) -> GateResult:
    """Check a signed report against its recorded hash.

    Without ``document`` only the presence of the hash can be confirmed.
    """

    if ReportStatus(status) is not ReportStatus.SIGNED:
        return GateResult.failed("report is not signed")
    if not stored_hash:
        return GateResult.failed("integrity hash not found")
    if document is None:
        return GateResult(ok=True, message=f"integrity hash present: {stored_hash[:16]}...")

    recorded = stored_hash.strip().lower().encode("utf-8")
    if not hmac.compare_digest(document_hash(document).encode("ascii"), recorded):
        return GateResult.failed("document does not match the recorded hash")
    return GateResult(ok=True, message="document matches the recorded hash")
