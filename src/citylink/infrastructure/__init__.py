"""Infrastructure layer — matrix files on disk.

This layer depends on stdlib and the domain parsers.
It must never import from services, commands, or output.
"""
