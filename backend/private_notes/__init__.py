"""
Private Notes Backend — Application Package
============================================

What: HTTP service storing personal text notes per authenticated user.
How:  Layered the same way from top to bottom:

    ┌─────────────────────────────────────┐
    │   Routes + Auth gate (API Layer)    │  ← HTTP concerns, bearer token
    ├─────────────────────────────────────┤
    │      NoteService (Business Logic)   │  ← validation, error mapping
    ├─────────────────────────────────────┤
    │  RecordStore / IdentityVerifier     │  ← external collaborators
    ├─────────────────────────────────────┤
    │  Models & Schemas / Database        │  ← SQLAlchemy ORM + Pydantic
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
