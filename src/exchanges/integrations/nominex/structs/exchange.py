"""
Nominex wire structures.

Only the shapes the adapter needs to dispatch on are declared as structs;
regular payloads are kept as plain JSON objects so that every normalized
record can carry the untouched exchange data in ``info``.
"""

from typing import List, Optional, Union

import msgspec

# Error codes come as strings ("110.110") but older endpoints send numbers
NominexErrorCode = Union[str, int, float]


class NominexErrorResponse(msgspec.Struct):
    """Error body carrying a single ``code``."""
    code: NominexErrorCode
    message: Optional[str] = None


class NominexErrorCodesResponse(msgspec.Struct):
    """Error body carrying a ``codes`` array; the first code is authoritative."""
    codes: List[NominexErrorCode]
    message: Optional[str] = None


NominexErrorListResponse = List[NominexErrorResponse]
