"""Application services.

Author: Michael Economou
Date: 2026-03-08
"""

from solutionlib.app.services.solution_io_worker import SolutionIOWorker
from solutionlib.app.services.solution_persistence import (
    LoggingReporter,
    SolutionPersistenceService,
)

__all__ = ["LoggingReporter", "SolutionIOWorker", "SolutionPersistenceService"]
