"""
Exercise Tracker: API Routes Package
======================================

Route Inventory:
    - pages.py:     GET  /                              (landing page)
    - users.py:     GET  /api/users                     (list users)
                    POST /api/users                     (create user)
    - exercises.py: POST /api/users/{_id}/exercises     (log an exercise)
                    GET  /api/users/{_id}/logs          (filtered exercise log)
    - health.py:    GET  /health                        (store connectivity)

Routes stay thin: pull values out of the request, call a service, return
its schema. Coercion and error mapping live in services and main.py.
"""
