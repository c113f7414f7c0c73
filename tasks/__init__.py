"""
tasks: per-user task records.

Provides:
  • ``TaskStore`` with owner-filtered CRUD
  • Shared status / priority parsing
  • Task API routes
"""
