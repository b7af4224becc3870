"""solutionlib.infra - file-backed solution stores (SQLite and XML)."""
