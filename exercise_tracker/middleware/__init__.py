"""
Exercise Tracker: Middleware Package
======================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID sets the correlation id before anything logs, and its
      RequestIdLogFilter stamps that id on every record (see setup_logging)
    - Logging measures the full handler duration and sees the final status
      plus any body-level error the exception handlers recorded
"""
