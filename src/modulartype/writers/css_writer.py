"""
Stylesheet Writer

Serialises a Stylesheet node tree back to text. Formatting recorded in node
raws by the parser is reused as is; nodes built in code (no raws) get
two-space indented defaults.
"""

from typing import List

from ..core.stylesheet import AtRule, Comment, Container, Declaration, Node, Rule, Stylesheet


class CSSWriter:
    """Write Stylesheet node tree to string format"""

    def __init__(self, indent: str = "  "):
        self.indent = indent

    def write(self, stylesheet: Stylesheet) -> str:
        """Generate stylesheet text from document"""
        body = self._format_children(stylesheet, 0)
        return body + stylesheet.raws.get("after", "\n" if stylesheet.nodes else "")

    def _default_before(self, node: Node, index: int, level: int) -> str:
        if level:
            return "\n" + self.indent * level
        if index == 0:
            return ""
        return "\n\n" if isinstance(node, Container) else "\n"

    def _format_children(self, container: Container, level: int) -> str:
        parts: List[str] = []
        last = len(container.nodes) - 1
        for i, node in enumerate(container.nodes):
            before = node.raws.get("before")
            if before is None:
                before = self._default_before(node, i, level)
            parts.append(before)
            parts.append(self._format_node(node, level, is_last=i == last))
        return "".join(parts)

    def _format_node(self, node: Node, level: int, is_last: bool) -> str:
        if isinstance(node, Comment):
            left = node.raws.get("left", " ")
            right = node.raws.get("right", " ")
            return f"/*{left}{node.text}{right}*/"

        if isinstance(node, Declaration):
            return self.format_declaration(node, is_last)

        if isinstance(node, AtRule):
            after_name = node.raws.get("afterName", " " if node.params else "")
            header = f"@{node.name}{after_name}{node.params}"
            if not node.has_block and not node.nodes:
                between = node.raws.get("between", "")
                semicolon = ";" if node.raws.get("semicolon", True) or not is_last else ""
                return f"{header}{between}{semicolon}"
            return self._format_block(node, header, level)

        if isinstance(node, Rule):
            return self._format_block(node, node.selector, level)

        raise TypeError(f"Cannot write {type(node).__name__} node")

    def _format_block(self, node: Container, header: str, level: int) -> str:
        between = node.raws.get("between", " ")
        after = node.raws.get("after")
        if after is None:
            after = "\n" + self.indent * level if node.nodes else ""
        return f"{header}{between}{{{self._format_children(node, level + 1)}{after}}}"

    @staticmethod
    def format_declaration(decl: Declaration, is_last: bool = False) -> str:
        between = decl.raws.get("between", ": ")
        important = decl.raws.get("important", " !important") if decl.important else ""
        after = decl.raws.get("after", "")
        semicolon = ";" if decl.raws.get("semicolon", True) or not is_last else ""
        return f"{decl.prop}{between}{decl.value}{important}{after}{semicolon}"
