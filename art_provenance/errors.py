"""
errors.py - Exception types raised by the provenance extraction pipeline.

Module: art_provenance.errors
"""

__all__ = ['ProvenanceError', 'DateError', 'ProvenanceFormatError']


class ProvenanceError(Exception):
    """Base class for all art_provenance errors."""


class DateError(ProvenanceError, ValueError):
    """
    A date or date range could not be resolved, or is inconsistent
    (for example an ownership period that ends before it begins).
    """


class ProvenanceFormatError(ProvenanceError, ValueError):
    """Structured provenance input does not have the expected shape."""
