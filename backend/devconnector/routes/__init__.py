"""
DevConnector Backend: API Routes Package
=========================================

Route Inventory:
    - users.py:    /api/users, /api/auth
    - profile.py:  /api/profile/...
    - posts.py:    /api/posts/...
    - health.py:   /health

Design Principle:
    Routes are THIN. They declare the request schema (input validation),
    the auth dependency (identity verification) and delegate to a service.
    Errors are raised by services and rendered by the handlers in main.py.
"""
