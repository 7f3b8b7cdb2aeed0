"""
Core Package

Contains the service-agnostic building blocks shared by the Intrinio client:
- config: Pydantic Settings for base URL, credentials and timeouts
- logging: Centralized logger setup and request/response log helpers
- schemas: Pydantic models for decoded response payloads
- utils: Wire-format helpers (date formatting)
"""
