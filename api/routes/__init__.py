"""API route handlers."""

from api.routes import health, template, upload, results, proof

__all__ = ["health", "template", "upload", "results", "proof"]
