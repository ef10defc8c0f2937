from fastapi import FastAPI

from . import auth, health, reference, resources, students, submissions


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(reference.router)
    app.include_router(students.router)
    app.include_router(submissions.router)
    app.include_router(resources.router)
