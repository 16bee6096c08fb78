"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (JSON bodies, API responses)
    - Multipart forms validated by FastAPI Form() parameters in the route

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Field aliases keep the mobile client's camelCase (shirtId, postId)
"""
