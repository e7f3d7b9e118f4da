"""Infrastructure Layer — database sessions and logging setup.

Invariants:
    - Infrastructure never imports core/ value objects, only core/errors
"""
