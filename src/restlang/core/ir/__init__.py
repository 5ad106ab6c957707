"""
restlang Intermediate Representation (IR) types.

All types are re-exported from this package.
"""

# Document
from .document import Document

# Entries
from .entries import (
    Emitter,
    Entry,
    Method,
    Receiver,
    Resource,
)

# Fields
from .fields import (
    FieldMap,
    Parameter,
)

# Properties
from .properties import (
    Authentication,
    Command,
    Identity,
    Mutable,
    Parent,
)

__all__ = [
    "Authentication",
    "Command",
    "Document",
    "Emitter",
    "Entry",
    "FieldMap",
    "Identity",
    "Method",
    "Mutable",
    "Parameter",
    "Parent",
    "Receiver",
    "Resource",
]
