"""Fatal error categories raised around the frame loop.

None of these are retried: each one ends the loop and the backend is shut
down before the failure is reported.
"""


class GlidepathError(Exception):
    """Base class for visualizer failures."""


class InitializationError(GlidepathError):
    """The window, renderer or clock could not be set up."""


class ClockReadError(GlidepathError):
    """The monotonic clock could not be read during the loop."""


class RenderError(GlidepathError):
    """Drawing or presenting a frame failed."""
