from .base_extension import Extension
from .context import CustomContext
from .schema_directive import SchemaDirectiveExtension

__all__ = [
    "Extension",
    "CustomContext",
    "SchemaDirectiveExtension",
]
