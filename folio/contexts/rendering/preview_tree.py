"""
Preview Tree

Target-agnostic node structure for the interactive preview: nested containers
with CSS-like style dictionaries, sufficient for any UI layer (or the HTML painter
in contexts/export) to paint.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Tuple

CONTAINER = "container"
TEXT_RUN = "text-run"
LINE_BREAK = "line-break"
LIST = "list"
LIST_ITEM = "list-item"
TWO_COLUMN_ROW = "two-column-row"
RULE = "rule"

NODE_KINDS = (CONTAINER, TEXT_RUN, LINE_BREAK, LIST, LIST_ITEM, TWO_COLUMN_ROW, RULE)


@dataclass
class PreviewNode:
    """
    One preview node.

    Attributes:
        kind: One of NODE_KINDS
        style: CSS-like properties in camelCase (e.g. {"fontWeight": "bold"})
        text: Text of a text-run; empty for every other kind
        children: Child nodes in reading order
        role: What the node represents ("name", "section", "item", ...), for painters
        marker: Bullet glyph of a list-item (presentation only, not content)
    """

    kind: str
    style: Dict[str, Any] = field(default_factory=dict)
    text: str = ""
    children: List["PreviewNode"] = field(default_factory=list)
    role: str = ""
    marker: str = ""

    def walk(self) -> Iterator["PreviewNode"]:
        """Depth-first, pre-order traversal."""
        yield self
        for child in self.children:
            yield from child.walk()

    def text_segments(self) -> Tuple[str, ...]:
        """Texts of all non-empty text runs, in reading order."""
        return tuple(node.text for node in self.walk() if node.kind == TEXT_RUN and node.text)

    def find(self, role: str) -> List["PreviewNode"]:
        return [node for node in self.walk() if node.role == role]

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind}
        if self.role:
            result["role"] = self.role
        if self.style:
            result["style"] = dict(self.style)
        if self.text:
            result["text"] = self.text
        if self.marker:
            result["marker"] = self.marker
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def container(*children: PreviewNode, style: Dict[str, Any] = None, role: str = "") -> PreviewNode:
    return PreviewNode(CONTAINER, style=style or {}, children=list(children), role=role)


def text_run(text: str, style: Dict[str, Any] = None) -> PreviewNode:
    return PreviewNode(TEXT_RUN, style=style or {}, text=text)


def line_break() -> PreviewNode:
    return PreviewNode(LINE_BREAK)
