"""
API Module

FastAPI application and route handlers.

Package Structure:
==================
    api/
    ├── main.py           ← Application entry point
    ├── routes.py         ← Route registration
    ├── dependencies/     ← DB session, principal resolver, services, rate limit
    ├── handlers/         ← Route handlers
    └── middleware/       ← Exception handlers

Usage:
======
    # Run the API
    uvicorn craftboard.api.main:app --reload

    # Import the app
    from craftboard.api.main import app, create_application
"""
