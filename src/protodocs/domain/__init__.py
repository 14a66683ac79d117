"""Domain layer: schema entities, descriptor models, and pure helpers.

This layer depends only on stdlib and pydantic.
It must never import from registry, services, infrastructure, commands, or config.
"""
