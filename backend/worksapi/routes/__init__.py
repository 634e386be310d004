# Routes package init
"""
Works API - API Routes Package
===============================

Route Inventory:
    - works.py:   GET    /api/works          (list works)
                  GET    /api/works/{id}     (get one work)
                  POST   /api/works          (create work)
                  PUT    /api/works/{id}     (update work)
                  DELETE /api/works/{id}     (delete work)
    - health.py:  GET    /health             (service health check)

Routes stay thin: read the request, call WorkService, shape the response.
"""
