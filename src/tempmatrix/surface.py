"""Minimal retained-mode drawing surface.

Renderers build a tree of `Node`s (group, rect, path, text, gradient …) with
presentation attributes and named pointer actions. The tree can be inspected
directly, driven by `InteractionController.dispatch`, or serialised to SVG.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Any

POINTER_ENTER = "pointerenter"
POINTER_MOVE = "pointermove"
POINTER_LEAVE = "pointerleave"
CLICK = "click"
EVENTS = (POINTER_ENTER, POINTER_MOVE, POINTER_LEAVE, CLICK)


@dataclass(eq=False)
class Node:
    """One drawable element. `datum` is the data bound at render time."""

    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)
    text: str | None = None
    handlers: dict[str, str] = field(default_factory=dict)  # event → action
    datum: Any = None

    def append(self, tag: str, text: str | None = None, datum: Any = None, **attrs: Any) -> Node:
        """Append a child. Attribute names use `_` for `-` (stroke_width → stroke-width)."""
        attrs = {k.rstrip("_").replace("_", "-"): v for k, v in attrs.items()}
        child = Node(tag=tag, attrs=attrs, text=text, datum=datum)
        self.children.append(child)
        return child

    def group(self, x: float = 0.0, y: float = 0.0, **attrs: Any) -> Node:
        if x or y:
            attrs["transform"] = f"translate({_num(x)},{_num(y)})"
        return self.append("g", **attrs)

    def on(self, event: str, action: str) -> Node:
        if event not in EVENTS:
            raise ValueError(f"Unsupported event: {event}")
        self.handlers[event] = action
        return self

    def iter(self):
        """Depth-first over this node and all descendants."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find_all(self, class_name: str) -> list[Node]:
        return [n for n in self.iter() if class_name in str(n.attrs.get("class", "")).split()]


def _num(v: Any) -> str:
    if isinstance(v, float):
        return f"{v:.2f}".rstrip("0").rstrip(".")
    return str(v)


def _to_svg(node: Node, indent: int) -> str:
    pad = "  " * indent
    attrs = "".join(f' {k}="{html.escape(_num(v))}"' for k, v in node.attrs.items())
    attrs += "".join(f' data-on-{e}="{html.escape(a)}"' for e, a in node.handlers.items())
    if node.text is None and not node.children:
        return f"{pad}<{node.tag}{attrs}/>"
    inner = html.escape(node.text) if node.text is not None else ""
    if not node.children:
        return f"{pad}<{node.tag}{attrs}>{inner}</{node.tag}>"
    body = "\n".join(_to_svg(c, indent + 1) for c in node.children)
    return f"{pad}<{node.tag}{attrs}>{inner}\n{body}\n{pad}</{node.tag}>"


class Surface:
    """A canvas of fixed pixel size holding one node tree."""

    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.root = Node(
            "svg",
            attrs={
                "xmlns": "http://www.w3.org/2000/svg",
                "width": width,
                "height": height,
                "viewBox": f"0 0 {_num(width)} {_num(height)}",
            },
        )
        self.defs = self.root.append("defs")

    def linear_gradient(self, gradient_id: str, stops: list[tuple[float, str]], vertical: bool = True) -> Node:
        """Register a gradient in <defs>; stops are (fraction, colour)."""
        grad = self.defs.append(
            "linearGradient",
            id=gradient_id,
            x1="0%",
            y1="0%",
            x2="0%" if vertical else "100%",
            y2="100%" if vertical else "0%",
        )
        for offset, color in stops:
            grad.append("stop", offset=f"{_num(offset * 100)}%", stop_color=color)
        return grad

    def to_svg(self) -> str:
        return _to_svg(self.root, 0)
