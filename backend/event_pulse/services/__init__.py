"""Services Layer — persistence adapters between core records and ORM rows.

Invariants:
    - Repositories satisfy the Protocols in core/repository_protocols.py
"""
