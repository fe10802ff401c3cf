"""Generator descriptors and library."""

from .registry import GenerateFn, GeneratorDescriptor, GeneratorLibrary

__all__ = ["GenerateFn", "GeneratorDescriptor", "GeneratorLibrary"]
