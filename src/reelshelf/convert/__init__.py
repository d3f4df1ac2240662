"""External conversion and tagging tools.

These wrappers keep subprocess handling out of the jobs so the jobs can be
tested with plain mocks.
"""

from .atomicparsley import AtomicParsleyProvider
from .handbrake import HandbrakeProvider

__all__ = ["AtomicParsleyProvider", "HandbrakeProvider"]
