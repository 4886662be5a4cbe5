"""Service layer — skeleton generation entry points.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
