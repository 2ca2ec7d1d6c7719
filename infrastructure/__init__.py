"""
Infrastructure Package
======================

Provides abstraction layers for external dependencies following the Dependency Inversion Principle.

Modules:
    - backend: Hosted database-and-auth service (REST data, password auth, in-memory)
    - container: Service locator for backend adapters and domain services

This package enables:
    - Easy testing with in-memory implementations
    - Switching between hosted projects without code changes
    - Loose coupling between business logic and infrastructure
"""
