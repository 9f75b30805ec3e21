"""CraftAI Studio — FastAPI REST API layer.

This package contains the FastAPI application, Pydantic request/response
models, and the mapping of generator failures onto HTTP errors.

Modules
-------
main
    FastAPI application with all route handlers and the ``main()`` CLI
    entry point.
models
    Pydantic models for API request and response validation.
errors
    Generator failure → HTTP status translation.
"""
