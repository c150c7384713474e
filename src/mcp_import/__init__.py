"""
MCP Registry Import

Imports MCP (Model Context Protocol) server descriptions published by external
registries into a managed server catalog.

This package handles:
- Registry record parsing (inline JSON, uploaded files, paginated HTTP registries)
- Normalization into the internal server record
- Validation and per-item import with create / update / skip conflict rules

Components:
- registry: registry record models and the schema transformer
- client: paginated HTTP registry client
- packages: package launch command synthesis
- importer: source dispatching, execution and result aggregation
- api_routes: FastAPI routes for validate / execute
"""

__version__ = "1.0.0"
