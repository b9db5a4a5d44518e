"""
Feature modules for PetConnect backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for external collaborators
- models.py: Pydantic models for data transfer
- service/context modules: Business logic and session state
- routes.py: FastAPI route handlers
- exceptions.py: Module-specific exceptions

Modules communicate through interfaces, not concrete implementations.
"""
