"""
API Layer - FastAPI Presentation Layer

Responsibility:
    HTTP interface of the gateway. Validates request shape, delegates to the
    Application Layer and maps exceptions to status codes.

Does NOT contain:
    - Business logic (Domain Layer)
    - Orchestration of the submission steps (Application Layer)
    - Redis/PostgreSQL access (Infrastructure Layer)
"""
