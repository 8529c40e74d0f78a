"""
errors.py — Error taxonomy
===========================
Everything the visualizer raises on purpose derives from VisualizerError,
so the HTTP layer can turn it into a 4xx with one handler.

Tracers never raise on well-typed input.  These errors come from the
boundary (validation), the registry and the catalog.
"""


class VisualizerError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 400


class InvalidInputError(VisualizerError, ValueError):
    """Malformed user input, rejected before any tracer runs."""


class UnknownAlgorithmError(VisualizerError, ValueError):
    """No algorithm registered (or catalogued) under the requested key."""

    status_code = 404


class DuplicateAlgorithmError(VisualizerError):
    """A catalog entry with the same (type, name) already exists."""

    status_code = 409
