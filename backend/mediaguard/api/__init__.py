"""
MediaGuard API Package.

Package Structure:
    - errors.py: mapping of failed verdicts to HTTP status codes
    - v1/: Version 1 API endpoints
        - media.py: category lookups and upload validation endpoints

All endpoints are versioned under the /api/v1 URL prefix.
"""
