"""Module: __init__.py.

Author: Michael Economou
Date: 2026-03-03

Pure Python event/signal implementation used by the view-model tree,
the persistence service and the background workers.
"""

from solutionlib.utils.events.observable import Observable, Signal

__all__ = ["Observable", "Signal"]
