"""Infrastructure layer — reflection, materializers, target loading.

This layer depends on stdlib, pydantic, and the domain descriptors.
It must never import from services, commands, or output.
"""
