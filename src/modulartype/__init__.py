"""
modulartype - Fluid modular type scales for CSS

Generates CSS custom properties whose font sizes follow a ratio-based scale
and grow linearly with the viewport between two screen widths, then writes
them into stylesheets at a directive comment or inline.
"""

__version__ = "0.1.0"

from .api import generate_scale, process_css, process_file
from .config import load_config_file, resolve_config
from .core.models import ScaleConfig, ScaleMapping, ScaleStep, SuffixType, Unit
from .core.scale import ScaleGenerator, generate
from .core.stylesheet import AtRule, Comment, Declaration, Rule, Stylesheet
from .core.validation import ConfigurationError
from .parsers.css_parser import CSSParser, CSSSyntaxError
from .parsers.value_parser import ValueParser, ValueSyntaxError
from .processors import DirectiveExpander, InlineReplacer, ModularTypeProcessor
from .writers.css_writer import CSSWriter

# Public API
__all__ = [
    # Version
    "__version__",
    # High-level API
    "generate_scale",
    "process_css",
    "process_file",
    # Configuration
    "ScaleConfig",
    "SuffixType",
    "Unit",
    "resolve_config",
    "load_config_file",
    "ConfigurationError",
    # Scale
    "ScaleGenerator",
    "ScaleMapping",
    "ScaleStep",
    "generate",
    # Stylesheets
    "Stylesheet",
    "Rule",
    "AtRule",
    "Declaration",
    "Comment",
    "CSSParser",
    "CSSSyntaxError",
    "CSSWriter",
    "ValueParser",
    "ValueSyntaxError",
    # Processing
    "DirectiveExpander",
    "InlineReplacer",
    "ModularTypeProcessor",
]
