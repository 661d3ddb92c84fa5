"""
API package for the Similar Image Scanner.

Provides the Flask blueprint exposing scans over HTTP/JSON.
"""

from __future__ import annotations

from .routes import api, REGISTRY_KEY

__all__ = ['api', 'REGISTRY_KEY']
