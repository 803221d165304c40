"""Domain layer — field kinds, constraints, catalog, and models.

This layer depends only on stdlib, pydantic, and email-validator.
It must never import from validation, services, infrastructure, commands, or config.
"""
