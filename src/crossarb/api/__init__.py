"""HTTP API exposing pairs, opportunities and pair status."""

from crossarb.api.server import create_app


__all__ = ["create_app"]
