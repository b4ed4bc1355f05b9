"""
Declaration value tokenizer

Splits a declaration value into typed nodes, in the same shape as
postcss-value-parser:

- word:     identifiers, numbers, custom property names (--font-size-0)
- string:   quoted text, value without quotes
- function: name(...) with child nodes, value is the function name
- space:    whitespace between nodes
- div:      separators , / :
- comment:  /* ... */
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

DIVIDERS = ",/:"
WORD_STOP = set(" \t\n\r\f'\"()") | set(DIVIDERS)


class ValueSyntaxError(ValueError):
    """Raised when a declaration value cannot be tokenized"""

    def __init__(self, message: str, value: str, position: int):
        super().__init__(f"{message} at position {position} in value: {value}")
        self.value = value
        self.position = position


@dataclass
class ValueNode:
    type: str
    value: str
    nodes: List["ValueNode"] = field(default_factory=list)
    quote: Optional[str] = None


class ValueParser:
    """Tokenize a declaration value into ValueNode trees"""

    @classmethod
    def parse(cls, value: str) -> List[ValueNode]:
        root: List[ValueNode] = []
        stack = [(root, -1)]
        pos = 0

        while pos < len(value):
            char = value[pos]
            nodes = stack[-1][0]

            if char.isspace():
                end = pos
                while end < len(value) and value[end].isspace():
                    end += 1
                nodes.append(ValueNode("space", value[pos:end]))
                pos = end

            elif value.startswith("/*", pos):
                end = value.find("*/", pos + 2)
                if end == -1:
                    raise ValueSyntaxError("Unclosed comment", value, pos)
                nodes.append(ValueNode("comment", value[pos + 2:end]))
                pos = end + 2

            elif char in ("'", '"'):
                end = pos + 1
                while end < len(value) and value[end] != char:
                    end += 2 if value[end] == "\\" else 1
                if end >= len(value):
                    raise ValueSyntaxError("Unclosed string", value, pos)
                nodes.append(ValueNode("string", value[pos + 1:end], quote=char))
                pos = end + 1

            elif char in DIVIDERS:
                nodes.append(ValueNode("div", char))
                pos += 1

            elif char == "(":
                # Anonymous parentheses, e.g. calc((1px + 2px) * 2)
                function = ValueNode("function", "")
                nodes.append(function)
                stack.append((function.nodes, pos))
                pos += 1

            elif char == ")":
                if len(stack) == 1:
                    raise ValueSyntaxError("Unexpected )", value, pos)
                stack.pop()
                pos += 1

            else:
                end = pos
                while end < len(value) and value[end] not in WORD_STOP:
                    end += 1
                word = value[pos:end]
                if end < len(value) and value[end] == "(":
                    function = ValueNode("function", word)
                    nodes.append(function)
                    stack.append((function.nodes, end))
                    end += 1
                else:
                    nodes.append(ValueNode("word", word))
                pos = end

        if len(stack) > 1:
            raise ValueSyntaxError("Unclosed bracket", value, stack[-1][1])

        return root

    @classmethod
    def walk(cls, nodes: List[ValueNode]) -> Iterator[ValueNode]:
        """Depth-first walk over nodes and function arguments"""
        for node in nodes:
            yield node
            if node.nodes:
                yield from cls.walk(node.nodes)

    @classmethod
    def stringify(cls, nodes: List[ValueNode]) -> str:
        parts = []
        for node in nodes:
            if node.type == "function":
                parts.append(f"{node.value}({cls.stringify(node.nodes)})")
            elif node.type == "string":
                parts.append(f"{node.quote}{node.value}{node.quote}")
            elif node.type == "comment":
                parts.append(f"/*{node.value}*/")
            else:
                parts.append(node.value)
        return "".join(parts)


def walk_values(value: str) -> Iterator[ValueNode]:
    """Tokenize a value and walk every node"""
    return ValueParser.walk(ValueParser.parse(value))
