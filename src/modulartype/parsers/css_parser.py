"""
Stylesheet Parser Module

Turns stylesheet text into the node tree from core.stylesheet. Only the
structure needed for processing is recognised: comments, rules, at-rules and
declarations. Selectors, at-rule params and values are kept as raw text, and
the whitespace around every node is recorded in its `raws` so unchanged nodes
are written back exactly as they were read.
"""

import re
from typing import Optional, Tuple

from ..core.stylesheet import AtRule, Comment, Container, Declaration, Rule, Stylesheet
from ..utils.logging import ModularTypeLogger

IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
AT_RULE_RE = re.compile(r"@([^\s(]*)(\s*)(.*)$", re.DOTALL)


class CSSSyntaxError(ValueError):
    """Raised when stylesheet text cannot be split into nodes"""

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"Line {line}: {message}"
        super().__init__(message)
        self.line = line


def split_spaces(text: str) -> Tuple[str, str, str]:
    """Split text into (leading whitespace, body, trailing whitespace)"""
    body = text.strip()
    if not body:
        return text, "", ""
    start = len(text) - len(text.lstrip())
    return text[:start], body, text[start + len(body):]


class CSSParser:
    """Parse stylesheet text into a Stylesheet node tree"""

    def __init__(self):
        self.content = ""
        self.pos = 0

    def parse_file(self, filepath: str) -> Stylesheet:
        """Parse stylesheet file"""
        with open(filepath, encoding="utf-8") as f:
            content = f.read()
        return self.parse(content)

    def parse(self, content: str) -> Stylesheet:
        """Parse stylesheet content"""
        self.content = content
        self.pos = 0

        root = Stylesheet()
        self._parse_block(root, nested=False)

        ModularTypeLogger.debug(f"Parsed stylesheet with {len(root.nodes)} top-level nodes")
        return root

    def _line_at(self, pos: int) -> int:
        return self.content.count("\n", 0, pos) + 1

    def _parse_block(self, container: Container, nested: bool) -> None:
        """Parse child nodes until the closing brace (or end of input at root)"""
        content = self.content
        buffer = []
        buffer_start = self.pos
        paren_depth = 0

        while self.pos < len(content):
            char = content[self.pos]

            if content.startswith("/*", self.pos):
                end = content.find("*/", self.pos + 2)
                if end == -1:
                    raise CSSSyntaxError("Unclosed comment", self._line_at(self.pos))
                raw = content[self.pos:end + 2]
                self.pos = end + 2
                if "".join(buffer).strip():
                    # Comment in the middle of a statement stays part of it
                    buffer.append(raw)
                else:
                    container.append(self._make_comment(raw, "".join(buffer)))
                    buffer = []
                    buffer_start = self.pos
                continue

            if char in ("'", '"'):
                buffer.append(self._read_string(char))
                continue

            if char == "(":
                paren_depth += 1
            elif char == ")" and paren_depth:
                paren_depth -= 1
            elif paren_depth == 0 and char == "{":
                self.pos += 1
                node = self._open_block("".join(buffer), buffer_start)
                container.append(node)
                self._parse_block(node, nested=True)
                buffer = []
                buffer_start = self.pos
                continue
            elif paren_depth == 0 and char == ";":
                self._add_statement(container, "".join(buffer), buffer_start, terminated=True)
                self.pos += 1
                buffer = []
                buffer_start = self.pos
                continue
            elif paren_depth == 0 and char == "}":
                if not nested:
                    raise CSSSyntaxError("Unexpected }", self._line_at(self.pos))
                self._close(container, "".join(buffer), buffer_start)
                self.pos += 1
                return

            buffer.append(char)
            self.pos += 1

        if nested:
            raise CSSSyntaxError("Unclosed block", self._line_at(len(content)))
        self._close(container, "".join(buffer), buffer_start)

    def _close(self, container: Container, text: str, start: int) -> None:
        """Handle text before "}" or end of input: last statement and trailing spaces"""
        before, body, after = split_spaces(text)
        if body:
            self._add_statement(container, before + body, start, terminated=False)
            container.raws["after"] = after
        else:
            container.raws["after"] = text

    def _read_string(self, quote: str) -> str:
        """Consume a quoted string, including quotes and escapes"""
        content = self.content
        start = self.pos
        self.pos += 1
        while self.pos < len(content):
            char = content[self.pos]
            if char == "\\":
                self.pos += 2
                continue
            self.pos += 1
            if char == quote:
                return content[start:self.pos]
            if char == "\n":
                break
        raise CSSSyntaxError("Unclosed string", self._line_at(start))

    @staticmethod
    def _make_comment(raw: str, before: str) -> Comment:
        inner = raw[2:-2]
        left, text, right = split_spaces(inner)
        comment = Comment(text=text)
        comment.raws.update(before=before, left=left, right=right)
        return comment

    def _open_block(self, header: str, start: int) -> Container:
        before, body, between = split_spaces(header)

        if body.startswith("@"):
            node = self._make_at_rule(body)
            node.has_block = True
        elif not body:
            raise CSSSyntaxError("Rule without selector", self._line_at(start))
        else:
            node = Rule(selector=body)

        node.raws.update(before=before, between=between)
        return node

    @staticmethod
    def _make_at_rule(body: str) -> AtRule:
        match = AT_RULE_RE.match(body)
        node = AtRule(name=match.group(1), params=match.group(3))
        node.raws["afterName"] = match.group(2)
        return node

    def _add_statement(self, container: Container, text: str, start: int, terminated: bool) -> None:
        """Add a declaration or block-less at-rule"""
        before, body, after = split_spaces(text)
        if not body:
            return

        if body.startswith("@"):
            node = self._make_at_rule(body)
            node.raws.update(before=before, between=after, semicolon=terminated)
            container.append(node)
            return

        if ":" not in body:
            raise CSSSyntaxError(f"Unknown word '{body.split()[0]}'", self._line_at(start))

        prop, _, rest = body.partition(":")
        value = rest.lstrip()
        between = prop[len(prop.rstrip()):] + ":" + rest[:len(rest) - len(value)]

        decl = Declaration(prop=prop.rstrip(), value=value)
        match = IMPORTANT_RE.search(value)
        if match:
            decl.important = True
            decl.value = value[:match.start()]
            decl.raws["important"] = match.group(0)

        decl.raws.update(before=before, between=between, after=after, semicolon=terminated)
        container.append(decl)
