"""
Target-specific configuration generators.

This module contains generators for different persistence frameworks.
"""

from .csharp import CSharpGenerator, create_csharp_generator

__all__ = [
    "CSharpGenerator",
    "create_csharp_generator",
]
