"""Analysis of designed filters."""

from ._frequency_response_sos import frequency_response_sos

__all__ = [
    "frequency_response_sos",
]
