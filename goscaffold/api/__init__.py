"""HTTP API for go-scaffold (FastAPI)."""

from goscaffold.api.app import create_app

__all__ = ["create_app"]
