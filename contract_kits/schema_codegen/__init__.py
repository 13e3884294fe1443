# Schema Codegen Kit
# Translate CosmWasm contract schemas into typed bindings (Go, TypeScript, Python)
# through an external schema-to-types renderer

from .schema import ContractSchema, load_schema, schema_sources
from .renderer import QuicktypeRenderer
from .generator import generate_from_schema, generate_types_from_schema, render_binding

__all__ = [
    'ContractSchema',
    'load_schema',
    'schema_sources',
    'QuicktypeRenderer',
    'generate_from_schema',
    'generate_types_from_schema',
    'render_binding',
]
__version__ = '1.0.0'
