"""
Core building blocks shared by the DashiToon server and services.

- database/: SQLModel entities, repositories, session and audit interceptor
- models/: domain rules (enums, rating rubric, events) and API I/O schemas
- errors: application exception taxonomy
- logging_config / monitoring: logging and optional Logfire tracing
"""
