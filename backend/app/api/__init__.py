"""API Layer — FastAPI routes, auth gate, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses (or empty 204)

Design Decisions:
    - Thin routes: one statement per request, pure builders from core/
"""
