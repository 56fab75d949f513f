"""
C# configuration generator module.

Generates Entity Framework Core fluent configurations from entity metadata.
"""

from .generator import CSharpGenerator, create_csharp_generator, csharp_string

__all__ = [
    "CSharpGenerator",
    "create_csharp_generator",
    "csharp_string",
]
