"""
Private Notes Backend — Services Layer
=======================================

What:  Business logic and external-collaborator adapters, sitting between
       routes (HTTP) and the database / identity provider.

Service Inventory:
    - IdentityVerifier (abstract) / HttpIdentityVerifier: bearer token → Identity
    - RecordStore (abstract) / SqlNoteStore: ownership-scoped notes CRUD
    - NoteService: validation and error translation for the note endpoints
"""
