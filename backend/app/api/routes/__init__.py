"""Route Modules — one file per resource/concern.

Invariants:
    - Each module defines its own APIRouter
    - Protected routes declare `identity: Identity = Depends(require_identity)`
"""
