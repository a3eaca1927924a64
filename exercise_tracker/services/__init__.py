"""
Exercise Tracker: Services Layer
==================================

Service Inventory:
    - UserService:     create, list and look up users
    - ExerciseService: log exercises and build filtered exercise logs
    - coercion:        form/query value parsing and date rendering
"""
