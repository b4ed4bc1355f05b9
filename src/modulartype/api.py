"""
modulartype Public API

High-level functions for generating a fluid type scale and applying it to
stylesheets from other projects.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .config import resolve_config
from .core.models import ScaleMapping
from .core.scale import generate
from .parsers.css_parser import CSSParser
from .processors.substitution import ModularTypeProcessor
from .writers.css_writer import CSSWriter


def generate_scale(options: Optional[Mapping[str, Any]] = None, **overrides) -> ScaleMapping:
    """
    Generate the type scale for the given options.

    Args:
        options: Options mapping (snake_case or camelCase names), merged over defaults
        **overrides: Individual options, win over `options`

    Returns:
        Ordered ScaleMapping of variable name -> clamp() expression

    Example:
        import modulartype

        scale = modulartype.generate_scale(unit="px", min_step=1, max_step=3)
        print(scale.to_css())
    """
    return generate(resolve_config(options, **overrides))


def process_css(content: str, options: Optional[Mapping[str, Any]] = None, **overrides) -> str:
    """
    Apply the type scale to stylesheet content.

    Args:
        content: Stylesheet text
        options: Options mapping, merged over defaults
        **overrides: Individual options, win over `options`

    Returns:
        Processed stylesheet text

    Example:
        import modulartype

        css = '''
        :root {
          /* postcss-modular-type-generate */
        }
        '''
        print(modulartype.process_css(css, unit="px"))
    """
    processor = ModularTypeProcessor(resolve_config(options, **overrides))
    stylesheet = CSSParser().parse(content)
    processor.process(stylesheet)
    return CSSWriter().write(stylesheet)


def process_file(
    input_path: Union[str, Path],
    output_path: Optional[Union[str, Path]] = None,
    options: Optional[Mapping[str, Any]] = None,
    **overrides,
) -> str:
    """
    Apply the type scale to a stylesheet file.

    Args:
        input_path: Stylesheet to read
        output_path: Where to write the result (optional)
        options: Options mapping, merged over defaults
        **overrides: Individual options, win over `options`

    Returns:
        Processed stylesheet text
    """
    with open(input_path, encoding="utf-8") as f:
        content = f.read()

    result = process_css(content, options, **overrides)

    if output_path is not None:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(result)

    return result
