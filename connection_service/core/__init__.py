"""Core building blocks: pagination, database access, settings and errors."""
