"""Group types shared by generators, the pipeline and the stores."""

from .models import (
    AccountSource,
    FetchedData,
    FetchedValue,
    GenerationContext,
    GenerationRecord,
    GroupMetadata,
    GroupSearch,
    GroupWithData,
    Properties,
    ResolvedGroupWithData,
    Tags,
    ValueType,
)

__all__ = [
    "AccountSource",
    "FetchedData",
    "FetchedValue",
    "GenerationContext",
    "GenerationRecord",
    "GroupMetadata",
    "GroupSearch",
    "GroupWithData",
    "Properties",
    "ResolvedGroupWithData",
    "Tags",
    "ValueType",
]
