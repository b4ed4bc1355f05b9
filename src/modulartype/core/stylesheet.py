"""
Stylesheet document model

A small node tree for stylesheets: enough structure to find comments inside
rules, read and rewrite declarations, and write the result back out.

Each node keeps the source formatting around it in `raws`, so nodes that are
not touched are written back byte for byte:

- before:     whitespace before the node
- left/right: whitespace inside a comment, around its text
- between:    ":" and whitespace of a declaration, whitespace before "{" or ";"
- after:      whitespace before ";" of a declaration, before "}" of a block,
              or at the end of the stylesheet
- semicolon:  whether a declaration was terminated by ";"
- important:  the "!important" text as written
- afterName:  whitespace between an at-rule name and its params
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

NON_SPACE_RE = re.compile(r"\S")


@dataclass(eq=False)
class Node:
    """Base class for every stylesheet node"""
    parent: Optional["Container"] = field(default=None, init=False, repr=False)
    raws: Dict[str, Any] = field(default_factory=dict, init=False, repr=False)

    type = "node"

    def replace_with(self, *nodes: "Node") -> None:
        """Replace this node in its parent with the given nodes, in order

        Nodes without their own leading whitespace take this node's.
        """
        if self.parent is None:
            raise ValueError(f"Cannot replace detached {self.type} node")
        parent = self.parent
        index = parent.index(self)
        parent.nodes[index:index + 1] = list(nodes)
        for node in nodes:
            node.parent = parent
            if "before" not in node.raws and "before" in self.raws:
                node.raws["before"] = NON_SPACE_RE.sub("", self.raws["before"])
        self.parent = None

    def remove(self) -> None:
        if self.parent is not None:
            self.parent.nodes.remove(self)
            self.parent = None


@dataclass(eq=False)
class Comment(Node):
    """/* text */ with surrounding whitespace stripped from text"""
    text: str = ""

    type = "comment"


@dataclass(eq=False)
class Declaration(Node):
    """prop: value [!important]"""
    prop: str = ""
    value: str = ""
    important: bool = False

    type = "decl"


@dataclass(eq=False)
class Container(Node):
    """Node holding child nodes"""
    nodes: List[Node] = field(default_factory=list)

    type = "container"

    def __post_init__(self):
        for node in self.nodes:
            node.parent = self

    def append(self, *nodes: Node) -> "Container":
        for node in nodes:
            node.parent = self
            self.nodes.append(node)
        return self

    def index(self, child: Node) -> int:
        for i, node in enumerate(self.nodes):
            if node is child:
                return i
        raise ValueError(f"{child.type} node is not a child of this {self.type}")

    def walk(self) -> Iterator[Node]:
        """Depth-first walk over all descendants in document order

        Iterates over a snapshot of each child list, so the visited node may be
        replaced or removed while walking.
        """
        for node in list(self.nodes):
            yield node
            if isinstance(node, Container):
                yield from node.walk()

    def walk_comments(self) -> Iterator[Comment]:
        return (node for node in self.walk() if isinstance(node, Comment))

    def walk_decls(self) -> Iterator[Declaration]:
        return (node for node in self.walk() if isinstance(node, Declaration))

    def walk_rules(self) -> Iterator["Rule"]:
        return (node for node in self.walk() if isinstance(node, Rule))


@dataclass(eq=False)
class Rule(Container):
    """selector { ... }"""
    selector: str = ""

    type = "rule"


@dataclass(eq=False)
class AtRule(Container):
    """@name params; or @name params { ... }"""
    name: str = ""
    params: str = ""
    has_block: bool = False

    type = "atrule"


@dataclass(eq=False)
class Stylesheet(Container):
    """Root of a parsed stylesheet"""

    type = "root"
