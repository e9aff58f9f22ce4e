"""API Package - Flask blueprints."""

from .merkle_api import merkle_api

__all__ = ['merkle_api']
