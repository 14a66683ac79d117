"""Service layer: schema queries returning ServiceResult.

Services may import from domain, registry, and infrastructure layers.
They must never import from commands or output.
"""
