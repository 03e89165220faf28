# geolabel/core/geo/errors.py
"""
Typed domain errors for the offline geocoder.

Only dataset loading raises.  A coordinate that cannot be resolved is a
normal outcome (``None``), never an exception.
"""
from __future__ import annotations


class GeocoderError(Exception):
    """Base class for all geocoder domain errors."""

    def __init__(self, detail: str = "Geocoder error"):
        self.detail = detail
        super().__init__(detail)


class GeodataLoadError(GeocoderError):
    """A dataset file is missing, unreadable, or structurally invalid.

    The engine stays in ``NOT_LOADED`` after this error, so the next
    query retries the load.
    """

    def __init__(self, dataset: str, detail: str):
        self.dataset = dataset
        super().__init__(f"{dataset}: {detail}")
