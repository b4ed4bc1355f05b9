"""
Configuration validation for modulartype

Checks that resolved options can produce a scale before any value is computed.
"""

from typing import List

from .models import ScaleConfig, SuffixType, Unit


class ConfigurationError(ValueError):
    """Raised when type scale options are invalid"""


class ConfigValidator:
    """Validate a resolved ScaleConfig"""

    @staticmethod
    def check_suffix_type(config: ScaleConfig) -> List[str]:
        if config.suffix_type not in SuffixType.ALL:
            return [
                f"Unknown suffix type '{config.suffix_type}'. "
                f"Expected one of: {', '.join(SuffixType.ALL)}"
            ]
        return []

    @staticmethod
    def check_unit(config: ScaleConfig) -> List[str]:
        if config.unit not in Unit.ALL:
            return [f"Unknown unit '{config.unit}'. Expected one of: {', '.join(Unit.ALL)}"]
        return []

    @staticmethod
    def check_suffix_values(config: ScaleConfig) -> List[str]:
        """Every step needs its own suffix when naming by values"""
        if config.suffix_type != SuffixType.VALUES:
            return []
        if len(config.suffix_values) > config.min_step + config.max_step:
            return []

        return [
            "Insufficient suffixes passed.\n"
            f"Number of steps: {config.min_step}(minStep) + {config.max_step}(maxStep)"
            f" + 1(baseStep) = {config.step_count}\n"
            f"Number of suffixes: {len(config.suffix_values)}\n"
            f"Current suffix list: {','.join(config.suffix_values)}"
        ]

    @classmethod
    def validate(cls, config: ScaleConfig) -> None:
        """
        Validate configuration

        Raises:
            ConfigurationError: If any check fails; all messages are joined
        """
        errors = (
            cls.check_suffix_type(config)
            + cls.check_unit(config)
            + cls.check_suffix_values(config)
        )
        if errors:
            raise ConfigurationError("\n".join(errors))


def validate_config(config: ScaleConfig) -> None:
    ConfigValidator.validate(config)
