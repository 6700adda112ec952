"""Domain layer — field types, schemas, and the record validator.

This layer depends only on stdlib, pydantic, and ruamel.yaml (schema files).
It must never import from services, infrastructure, commands, or config.
"""
