"""
ErrorPolicy enum for handling unreadable candidates during a match scan.

Two policies are supported:
1. Abort - the first comparison I/O error stops the whole run
2. Skip - the failing candidate is logged, recorded, and the scan continues
"""

from enum import Enum


class ErrorPolicy(Enum):
    """Encodes what the selector does when a comparison raises an I/O error."""
    ABORT = "abort"    # Propagate the error and stop the run
    SKIP = "skip"      # Log and record the error, then try the next candidate
