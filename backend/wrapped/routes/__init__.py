# Routes package init
"""
Wrapped Backend - API Routes Package
======================================

Route Inventory:
    - auth.py:    POST /api/auth/register, /api/auth/login, /api/auth/logout
                  GET  /api/me
    - wraps.py:   GET/POST /api/wraps, POST /api/wraps/{id}/items,
                  DELETE /api/wraps/{id}
    - health.py:  GET  /health
    - web.py:     GET  /{path} client bundle fallback (production only)

Routes stay thin: read the body, call a service, shape the response.
"""
