"""
Fluid modular type scale generator

Each step of the scale gets a font size at the minimum and at the maximum
screen width, following a geometric progression with its own ratio on each
side. Between the two widths the size grows linearly, which is emitted as a
CSS clamp() expression:

    clamp(<min size>,  <slope>vw + <y intersect> , <max size>)
"""

from typing import List

from ..utils.formatting import to_fixed, with_unit
from ..utils.logging import ModularTypeLogger
from .models import ScaleConfig, ScaleMapping, ScaleStep, SuffixType, Unit
from .validation import validate_config


class ScaleGenerator:
    """Compute the steps of a fluid type scale from a ScaleConfig"""

    def __init__(self, config: ScaleConfig):
        validate_config(config)
        self.config = config

    def _to_rem(self, px_value: float) -> float:
        return px_value / self.config.root_font_size

    def _key_for(self, step: int, power: int) -> str:
        config = self.config
        if config.suffix_type == SuffixType.VALUES:
            return f"--{config.prefix}{config.suffix_values[step]}"
        return f"--{config.prefix}{power}"

    def steps(self) -> List[ScaleStep]:
        """Compute every step, smallest font size first"""
        config = self.config
        unit = config.unit
        precision = config.precision

        min_screen_width = config.min_screen_width
        max_screen_width = config.max_screen_width
        min_font_size = config.min_font_size
        max_font_size = config.max_font_size

        if unit == Unit.REM:
            min_screen_width = self._to_rem(min_screen_width)
            max_screen_width = self._to_rem(max_screen_width)
            min_font_size = self._to_rem(min_font_size)
            max_font_size = self._to_rem(max_font_size)

        # max_step - min_step - 1, not min_step
        base_index = config.base_index

        steps = []
        for step in range(config.min_step + config.max_step + 1):
            power = step - base_index

            fs_min = min_font_size * config.min_ratio ** power
            fs_max = max_font_size * config.max_ratio ** power

            slope = (fs_max - fs_min) / (max_screen_width - min_screen_width)
            y_intersect = with_unit(fs_min - slope * min_screen_width, precision, unit)
            slope_vw = to_fixed(slope * 100, precision)
            fs_min_final = with_unit(fs_min, precision, unit)
            fs_max_final = with_unit(fs_max, precision, unit)

            steps.append(
                ScaleStep(
                    step=step,
                    power=power,
                    key=self._key_for(step, power),
                    value=f"clamp({fs_min_final},  {slope_vw}vw + {y_intersect} , {fs_max_final})",
                    min_size=fs_min_final,
                    max_size=fs_max_final,
                    slope_vw=slope_vw,
                    y_intersect=y_intersect,
                )
            )

        return steps

    def generate(self) -> ScaleMapping:
        """Build the ordered variable name -> clamp() mapping"""
        steps = self.steps()
        ModularTypeLogger.debug(
            f"Generated {len(steps)} scale steps "
            f"({self.config.min_step} below, {self.config.max_step} above base)"
        )
        for scale_step in steps:
            ModularTypeLogger.debug(f"  {scale_step.key}: {scale_step.value}")
        return ScaleMapping(tuple((s.key, s.value) for s in steps))


def generate(config: ScaleConfig) -> ScaleMapping:
    """Generate the scale mapping for a resolved configuration

    Raises:
        ConfigurationError: If the configuration cannot produce a scale
    """
    return ScaleGenerator(config).generate()
