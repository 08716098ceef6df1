"""
Transformers from external specifications to the schema model.

Supported transformations:
- OpenAPI 3.x -> SqlSchema (component schemas become tables)
"""

from .openapi_to_schema import load_openapi_schema, openapi_to_schema

__all__ = ["openapi_to_schema", "load_openapi_schema"]
