"""
Private Notes Backend — API Routes Package
===========================================

Route Inventory:
    - notes.py:   GET    /api/notes          (list the caller's notes)
                  GET    /api/notes/{id}     (get one note)
                  POST   /api/notes          (create)
                  PUT    /api/notes/{id}     (update)
                  DELETE /api/notes/{id}     (delete, idempotent)
    - health.py:  GET    /health             (service health check)

Routes stay thin: resolve identity and store, call NoteService, shape the
response. Business rules live in services.
"""
