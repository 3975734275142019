"""Domain layer — matrix store, path finder, closure engine.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""
