"""Core Layer — pure domain logic, no IO, no DB sessions.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Statement builders construct SQL but never execute it

Design Decisions:
    - Functional core separated from imperative shell: routes own the session
      and the single execute() per request
"""
