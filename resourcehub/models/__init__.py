"""
API request/response schemas.

Pydantic models grouped by domain: auth, user, creator, resource,
category, purchase, review, report, message, analytics.
"""
