"""Core Layer — pure temporal and identity logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are deterministic given their inputs (identifier generation
      additionally reads the wall clock once)

Design Decisions:
    - Functional core separated from imperative shell: routes and repositories
      orchestrate IO around these value objects
"""
