"""
Apply a generated type scale to a stylesheet

Two mutually exclusive policies:

- DirectiveExpander: a comment holding the generator directive inside a rule
  is replaced by one custom property declaration per scale step.
- InlineReplacer: declaration values that reference a scale variable are
  replaced by the variable's clamp() expression.
"""

from ..core.models import ScaleConfig, ScaleMapping
from ..core.scale import generate
from ..core.stylesheet import Declaration, Stylesheet
from ..parsers.value_parser import walk_values
from ..utils.logging import ModularTypeLogger


class DirectiveExpander:
    """Expand generator directive comments into scale declarations"""

    def __init__(self, mapping: ScaleMapping, directive: str):
        self.mapping = mapping
        self.directive = directive

    def expand(self, stylesheet: Stylesheet) -> int:
        """Replace directive comments found inside rules

        Returns:
            Number of directives expanded
        """
        expanded = 0
        for rule in stylesheet.walk_rules():
            for comment in rule.walk_comments():
                if comment.text != self.directive or comment.parent is None:
                    continue
                comment.replace_with(
                    *(Declaration(prop=key, value=value) for key, value in self.mapping)
                )
                expanded += 1
                ModularTypeLogger.debug(f"Expanded directive in '{rule.selector}'")
        return expanded


class InlineReplacer:
    """Replace scale variable references with their clamp() expression"""

    def __init__(self, mapping: ScaleMapping, prefix: str):
        self.mapping = mapping
        self.prefix = prefix

    def replace_value(self, value: str) -> str:
        """Return the replacement for a single declaration value

        The whole value is overwritten by the expression of a matching word;
        with several matches the last one wins.
        """
        if self.prefix not in value:
            return value

        replaced = value
        for node in walk_values(value):
            if node.type != "word":
                continue
            expression = self.mapping.get(node.value)
            if expression:
                replaced = expression
        return replaced

    def replace(self, stylesheet: Stylesheet) -> int:
        """Rewrite matching declaration values in place

        Returns:
            Number of declarations changed

        Raises:
            ValueSyntaxError: If a candidate value cannot be tokenized
        """
        changed = 0
        for decl in stylesheet.walk_decls():
            new_value = self.replace_value(decl.value)
            if new_value != decl.value:
                ModularTypeLogger.debug(f"Replaced {decl.prop}: {decl.value}")
                decl.value = new_value
                changed += 1
        return changed


class ModularTypeProcessor:
    """Generate a scale once and apply it to stylesheets"""

    def __init__(self, config: ScaleConfig):
        self.config = config
        self.mapping = generate(config)

    def process(self, stylesheet: Stylesheet) -> int:
        """Apply the configured policy to a stylesheet in place

        Returns:
            Number of directives expanded or declarations replaced
        """
        if self.config.replace_inline:
            count = InlineReplacer(self.mapping, self.config.prefix).replace(stylesheet)
            ModularTypeLogger.info(f"Replaced {count} declaration value(s) inline")
        else:
            count = DirectiveExpander(self.mapping, self.config.generator_directive).expand(
                stylesheet
            )
            ModularTypeLogger.info(f"Expanded {count} generator directive(s)")
        return count
