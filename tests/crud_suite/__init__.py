"""
CRUD Core Testing Suite

Test Categories:
- Store Operations: insert, get, list, update, delete and key policies
- Registry: registration, singleton resolution, dependency wiring
- Handler Operations: operation descriptor dispatch and status mapping
- HTTP Adapter: FastAPI routes over the handler
- Error Handling: structured logging and response bodies
"""
