"""
Core application: shared infrastructure for the chat backend.

Models (core.models):
    - BaseModel: abstract model with created_at / updated_at

Services (core.services):
    - BaseService: logger, transaction and exception helpers
    - ServiceResult: success/failure wrapper returned by every service

Exceptions (core.exceptions):
    - BaseApplicationError with ValidationError and ExternalServiceError

Views (core.views):
    - health_check: database/cache probe mounted at /health/
"""
