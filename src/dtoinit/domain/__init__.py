"""Domain layer — descriptors, shapes, and the default value builder.

This layer depends only on stdlib.
It must never import from services, infrastructure, commands, or config.
"""
