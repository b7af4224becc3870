"""Threading utilities.

Author: Michael Economou
Date: 2026-03-03

Qt-free threading abstractions for background save/load operations.
"""

from solutionlib.utils.threading.worker_base import WorkerBase

__all__ = ["WorkerBase"]
