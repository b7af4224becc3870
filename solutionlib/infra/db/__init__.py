"""SQLite solution store."""

from solutionlib.infra.db.schema import SCHEMA_VERSION
from solutionlib.infra.db.solution_db import SolutionDB, read_solution_db, write_solution_db

__all__ = ["SCHEMA_VERSION", "SolutionDB", "read_solution_db", "write_solution_db"]
