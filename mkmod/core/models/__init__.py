"""
Domain models — Pydantic types for module scaffolding.

All models are re-exported here for convenient access:

    from mkmod.core.models import ModuleSpec, ResolvedModule, GeneratedFile
"""

from mkmod.core.models.module import (
    ModuleKind,
    ModuleSpec,
    ParentInsertion,
    ResolvedModule,
    TargetRoot,
    Visibility,
)
from mkmod.core.models.template import GeneratedFile

__all__ = [
    "GeneratedFile",
    "ModuleKind",
    "ModuleSpec",
    "ParentInsertion",
    "ResolvedModule",
    "TargetRoot",
    "Visibility",
]
