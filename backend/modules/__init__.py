"""
Feature modules for the Task Tracker backend.

- auth: account store, OTP sign-in, password reset and session tokens
- notifications: outbound email for OTP delivery
- tasks: the shared kanban board, its realtime broadcaster and sync client

Each module keeps its Protocols in interfaces.py, pydantic models in
models.py, business logic in service.py and HTTP handlers in routes.py.
Modules depend on each other's interfaces, not their implementations.
"""
