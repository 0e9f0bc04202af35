"""
Application Layer - Use Cases and Orchestration

Responsibility:
    Coordinates the flow of a job between the gateway, the stores and the
    worker.

Contains:
    - commands/: SubmitJob (CQRS write)
    - queries/: ListJobs, CurrentValues (CQRS read)
    - services/: JobProcessor, ComputationWorker
    - tasks/: Celery task for the durable delivery mode

Does NOT contain:
    - Domain rules (in Domain Layer)
    - HTTP handling (in API Layer)
    - Redis/PostgreSQL details (in Infrastructure Layer)
"""
