"""Módulo de endpoints HTTP.

Expone el decoder hacia la capa de presentación, organizado por función.
"""

from .commands import router as commands_router
from .export import router as export_router
from .health import router as health_router
from .readings import router as readings_router
from .schema import router as schema_router

__all__ = [
    "commands_router",
    "export_router",
    "health_router",
    "readings_router",
    "schema_router",
]
