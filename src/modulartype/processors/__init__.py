"""
Processor modules for modulartype

This package contains the policies that apply a generated type scale to a
stylesheet.
"""

from .substitution import DirectiveExpander, InlineReplacer, ModularTypeProcessor

__all__ = ['DirectiveExpander', 'InlineReplacer', 'ModularTypeProcessor']
