"""Browser front end for the Tirukkural viewer (Flask)."""
from __future__ import annotations
from .web import app, init_engine, main

__all__ = ["app", "init_engine", "main"]
