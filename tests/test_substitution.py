"""Tests for applying a generated scale to stylesheets"""

import pytest

from modulartype.api import process_css
from modulartype.core.models import ScaleConfig
from modulartype.core.scale import generate
from modulartype.core.stylesheet import Comment, Declaration, Rule, Stylesheet
from modulartype.parsers.css_parser import CSSParser
from modulartype.parsers.value_parser import ValueSyntaxError
from modulartype.processors.substitution import (
    DirectiveExpander,
    InlineReplacer,
    ModularTypeProcessor,
)

DIRECTIVE = "postcss-modular-type-generate"


@pytest.fixture
def mapping():
    return generate(ScaleConfig(unit="px"))


class TestDirectiveExpansion:
    """Generator directive comments become scale declarations"""

    def test_directive_replaced_in_order(self, mapping):
        """Directive is replaced by one declaration per step, in step order"""
        sheet = CSSParser().parse(":root {\n  /* postcss-modular-type-generate */\n}\n")
        count = DirectiveExpander(mapping, DIRECTIVE).expand(sheet)

        rule = sheet.nodes[0]
        assert count == 1
        assert all(isinstance(node, Declaration) for node in rule.nodes)
        assert [(d.prop, d.value) for d in rule.nodes] == mapping.items()

    def test_surrounding_nodes_kept(self, mapping):
        """Declarations around the directive stay in place"""
        sheet = CSSParser().parse(
            ":root { color: red; /* postcss-modular-type-generate */ margin: 0; }"
        )
        DirectiveExpander(mapping, DIRECTIVE).expand(sheet)

        props = [d.prop for d in sheet.nodes[0].nodes]
        assert props[0] == "color"
        assert props[-1] == "margin"
        assert props[1:-1] == mapping.keys()

    def test_other_comments_untouched(self, mapping):
        sheet = CSSParser().parse(":root { /* keep me */ }")
        count = DirectiveExpander(mapping, DIRECTIVE).expand(sheet)

        assert count == 0
        assert isinstance(sheet.nodes[0].nodes[0], Comment)
        assert sheet.nodes[0].nodes[0].text == "keep me"

    def test_root_level_directive_untouched(self, mapping):
        """Only directives inside a rule are expanded"""
        sheet = CSSParser().parse("/* postcss-modular-type-generate */\n")
        assert DirectiveExpander(mapping, DIRECTIVE).expand(sheet) == 0
        assert isinstance(sheet.nodes[0], Comment)

    def test_directive_in_nested_rule(self, mapping):
        sheet = CSSParser().parse(
            "@media (min-width: 40em) { .prose { /* postcss-modular-type-generate */ } }"
        )
        assert DirectiveExpander(mapping, DIRECTIVE).expand(sheet) == 1
        prose = sheet.nodes[0].nodes[0]
        assert len(prose.nodes) == len(mapping)

    def test_multiple_directives(self, mapping):
        sheet = CSSParser().parse(
            ":root { /* postcss-modular-type-generate */ }\n"
            ".dark { /* postcss-modular-type-generate */ }\n"
        )
        assert DirectiveExpander(mapping, DIRECTIVE).expand(sheet) == 2
        assert len(sheet.nodes[0].nodes) == len(mapping)
        assert len(sheet.nodes[1].nodes) == len(mapping)

    def test_custom_directive(self, mapping):
        sheet = CSSParser().parse(":root { /* type-scale */ /* postcss-modular-type-generate */ }")
        DirectiveExpander(mapping, "type-scale").expand(sheet)

        nodes = sheet.nodes[0].nodes
        assert [n.prop for n in nodes[:-1]] == mapping.keys()
        assert isinstance(nodes[-1], Comment)


class TestInlineReplacement:
    """Scale variable references are replaced by their expression"""

    def test_var_reference_replaced(self, mapping):
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value("var(--font-size-0)") == mapping.get("--font-size-0")

    def test_bare_word_replaced(self, mapping):
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value("--font-size-2") == mapping.get("--font-size-2")

    def test_whole_value_overwritten(self, mapping):
        """Other tokens in the value are dropped"""
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value("calc(var(--font-size-1) * 2)") == mapping.get(
            "--font-size-1"
        )

    def test_last_match_wins(self, mapping):
        replacer = InlineReplacer(mapping, "font-size-")
        value = "var(--font-size-0) / var(--font-size-3)"
        assert replacer.replace_value(value) == mapping.get("--font-size-3")

    def test_unknown_variable_left_alone(self, mapping):
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value("var(--font-size-99)") == "var(--font-size-99)"

    def test_value_without_prefix_not_tokenized(self, mapping):
        """Values without the prefix are skipped even when malformed"""
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value("rgb(0, 0") == "rgb(0, 0"

    def test_string_token_not_replaced(self, mapping):
        replacer = InlineReplacer(mapping, "font-size-")
        assert replacer.replace_value('"--font-size-0"') == '"--font-size-0"'

    def test_replace_in_stylesheet(self, mapping):
        sheet = CSSParser().parse(
            "h1 { color: var(--font-size-0); font-size: var(--font-size-4); margin: 0 }"
        )
        count = InlineReplacer(mapping, "font-size-").replace(sheet)

        decls = sheet.nodes[0].nodes
        assert count == 2
        assert decls[0].value == mapping.get("--font-size-0")
        assert decls[1].value == mapping.get("--font-size-4")
        assert decls[2].value == "0"

    def test_malformed_value_propagates(self, mapping):
        sheet = Stylesheet(nodes=[
            Rule(selector="h1", nodes=[Declaration(prop="font-size", value="var(--font-size-0")])
        ])
        with pytest.raises(ValueSyntaxError):
            InlineReplacer(mapping, "font-size-").replace(sheet)


class TestProcessor:
    """Policy selection"""

    CSS = ":root { /* postcss-modular-type-generate */ }\nh1 { font-size: var(--font-size-0); }\n"

    def test_directive_policy_by_default(self):
        sheet = CSSParser().parse(self.CSS)
        processor = ModularTypeProcessor(ScaleConfig())
        processor.process(sheet)

        assert len(sheet.nodes[0].nodes) == 8
        assert sheet.nodes[1].nodes[0].value == "var(--font-size-0)"

    def test_inline_policy_skips_directives(self):
        sheet = CSSParser().parse(self.CSS)
        processor = ModularTypeProcessor(ScaleConfig(replace_inline=True))
        processor.process(sheet)

        assert isinstance(sheet.nodes[0].nodes[0], Comment)
        assert sheet.nodes[1].nodes[0].value == processor.mapping.get("--font-size-0")

    def test_processor_owns_mapping(self):
        first = ModularTypeProcessor(ScaleConfig(unit="px"))
        second = ModularTypeProcessor(ScaleConfig(unit="rem"))
        assert first.mapping.get("--font-size-0") != second.mapping.get("--font-size-0")


class TestProcessCss:
    """End to end text processing"""

    def test_directive_expansion_output(self):
        result = process_css(
            ":root {\n  /* postcss-modular-type-generate */\n}\n",
            unit="px",
            min_step=0,
            max_step=1,
        )
        assert result == (
            ":root {\n"
            "  --font-size-0: clamp(16.00px,  0.33vw + 14.95px , 20.00px);\n"
            "  --font-size-1: clamp(19.20px,  0.61vw + 17.24px , 26.66px);\n"
            "}\n"
        )

    def test_inline_output(self):
        result = process_css(
            "h1 { font-size: var(--font-size-0); }",
            {"replaceInline": True, "unit": "px"},
        )
        assert result == "h1 { font-size: clamp(16.00px,  0.33vw + 14.95px , 20.00px); }"

    def test_unrelated_stylesheet_unchanged(self):
        """Nothing to expand or replace: output is the input, byte for byte"""
        content = "a{color:red}\n/* note */\n.b > .c {\n    margin: 0 auto;\n}\n"
        assert process_css(content) == content
        assert process_css(content, replaceInline=True) == content

    def test_bang_comment_survives(self):
        assert process_css("/*! keep */\na{b:c}") == "/*! keep */\na{b:c}"

    def test_untouched_rules_keep_layout(self):
        content = (
            "a{color:red}\n"
            ":root {\n"
            "    /* postcss-modular-type-generate */\n"
            "}\n"
        )
        result = process_css(content, unit="px", min_step=0, max_step=1)
        assert result == (
            "a{color:red}\n"
            ":root {\n"
            "    --font-size-0: clamp(16.00px,  0.33vw + 14.95px , 20.00px);\n"
            "    --font-size-1: clamp(19.20px,  0.61vw + 17.24px , 26.66px);\n"
            "}\n"
        )
