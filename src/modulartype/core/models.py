"""
Data models for modulartype

This module contains the dataclasses describing a type scale configuration
and the generated scale.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


class SuffixType:
    """Variable naming strategies"""
    NUMBERED = "numbered"   # --font-size--1, --font-size-0, --font-size-2
    VALUES = "values"       # --font-size-sm, --font-size-base, --font-size-md

    ALL = (NUMBERED, VALUES)


class Unit:
    """Output units"""
    PX = "px"
    REM = "rem"

    ALL = (PX, REM)


DEFAULT_SUFFIX_VALUES = ("xs", "sm", "base", "md", "lg", "xl", "xxl", "xxxl")


@dataclass(frozen=True)
class ScaleConfig:
    """Fully resolved type scale options

    Widths and font sizes are given in px. With unit "rem" they are converted
    using root_font_size before the scale is computed.
    """
    min_screen_width: float = 320
    max_screen_width: float = 1536
    min_font_size: float = 16
    max_font_size: float = 20
    min_ratio: float = 1.2       # Minor Third
    max_ratio: float = 1.333     # Perfect Fourth
    min_step: int = 2
    max_step: int = 5
    root_font_size: float = 16
    precision: int = 2
    prefix: str = "font-size-"
    suffix_type: str = SuffixType.NUMBERED
    suffix_values: Tuple[str, ...] = DEFAULT_SUFFIX_VALUES
    unit: str = Unit.REM
    replace_inline: bool = False
    generator_directive: str = "postcss-modular-type-generate"

    @property
    def step_count(self) -> int:
        """Number of generated variables (steps below + steps above + base)"""
        return self.min_step + self.max_step + 1

    @property
    def base_index(self) -> int:
        """Step index whose ratio power is 0"""
        return self.max_step - self.min_step - 1

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["suffix_values"] = list(self.suffix_values)
        return data


@dataclass(frozen=True)
class ScaleStep:
    """A single computed step of the scale"""
    step: int                # 0 .. min_step + max_step
    power: int               # step - base_index
    key: str                 # --font-size-0
    value: str               # clamp(...)
    min_size: str            # size at min_screen_width, with unit
    max_size: str            # size at max_screen_width, with unit
    slope_vw: str
    y_intersect: str


@dataclass(frozen=True)
class ScaleMapping:
    """Ordered, read-only mapping of variable name -> clamp() expression

    Iteration order is step order (smallest font size first).
    """
    entries: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return any(k == key for k, _ in self.entries)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        for k, v in self.entries:
            if k == key:
                return v
        return default

    def keys(self) -> List[str]:
        return [k for k, _ in self.entries]

    def values(self) -> List[str]:
        return [v for _, v in self.entries]

    def items(self) -> List[Tuple[str, str]]:
        return list(self.entries)

    def to_dict(self) -> Dict[str, str]:
        return dict(self.entries)

    def to_css(self, selector: str = ":root") -> str:
        """Render the scale as a standalone rule block"""
        lines = [f"{selector} {{"]
        lines.extend(f"  {key}: {value};" for key, value in self.entries)
        lines.append("}")
        return "\n".join(lines)
