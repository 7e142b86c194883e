"""Max/min view mode and the pointer-action dispatcher.

The `ViewMode` is the only mutable shared state in the pipeline. It is owned
by the `InteractionController`; renderers read it, only `toggle` writes it.
"""

from collections.abc import Callable
from dataclasses import dataclass

from tempmatrix.config import TRANSITION_MS
from tempmatrix.models import MonthSummary, TempField
from tempmatrix.scales import SequentialColorScale
from tempmatrix.surface import CLICK, POINTER_ENTER, POINTER_LEAVE, POINTER_MOVE, Node

# Action names carried by cell nodes (also used by the browser script).
TOGGLE_MODE = "toggle-mode"
TOOLTIP_SHOW = "tooltip-show"
TOOLTIP_MOVE = "tooltip-move"
TOOLTIP_HIDE = "tooltip-hide"

TOOLTIP_OFFSET = (12, -28)  # px from the pointer


@dataclass
class ViewMode:
    show_max: bool = True

    @property
    def field(self) -> TempField:
        return TempField.MAX if self.show_max else TempField.MIN

    def toggle(self) -> TempField:
        self.show_max = not self.show_max
        return self.field


@dataclass
class TooltipState:
    """Transient hover label; reset on pointer exit."""

    visible: bool = False
    title: str = ""
    body: str = ""
    x: float = 0.0
    y: float = 0.0


def tooltip_lines(summary: MonthSummary, temp_field: TempField) -> tuple[str, str]:
    """(`YYYY-MM`, `Max: 14 °C`) for one cell."""
    value = summary.value(temp_field)
    return summary.label, f"{temp_field.label}: {value:g} °C"


def bind_cell(rect: Node) -> Node:
    """Attach the standard cell actions to a rect."""
    rect.on(POINTER_ENTER, TOOLTIP_SHOW)
    rect.on(POINTER_MOVE, TOOLTIP_MOVE)
    rect.on(POINTER_LEAVE, TOOLTIP_HIDE)
    rect.on(CLICK, TOGGLE_MODE)
    return rect


class InteractionController:
    """Two-state machine (MAX ↔ MIN) driving cell colours and the hover label.

    Args:
        color: Colour scale shared with the legend.
        mode: Initial mode; defaults to showing maxima.
        indicator: Receives "Maximum"/"Minimum" after each toggle.
    """

    def __init__(
        self,
        color: SequentialColorScale,
        mode: ViewMode | None = None,
        indicator: Callable[[str], None] | None = None,
    ) -> None:
        self.color = color
        self.mode = mode or ViewMode()
        self.indicator = indicator
        self.tooltip = TooltipState()
        self.cells: list[Node] = []

    @property
    def field(self) -> TempField:
        return self.mode.field

    def fill_for(self, summary: MonthSummary) -> str:
        return self.color(summary.value(self.mode.field))

    def bind(self, cells: list[Node]) -> None:
        """Register the cell rects that `toggle` recolours."""
        self.cells = list(cells)

    def toggle(self) -> TempField:
        """Flip the mode, update the indicator, recolour every registered cell."""
        new_field = self.mode.toggle()
        if self.indicator is not None:
            self.indicator(new_field.indicator)
        for rect in self.cells:
            rect.attrs["fill"] = self.fill_for(rect.datum)
            rect.attrs["data-transition-ms"] = TRANSITION_MS
        return new_field

    def show_tooltip(self, summary: MonthSummary) -> None:
        title, body = tooltip_lines(summary, self.mode.field)
        self.tooltip.visible = True
        self.tooltip.title = title
        self.tooltip.body = body

    def move_tooltip(self, x: float, y: float) -> None:
        dx, dy = TOOLTIP_OFFSET
        self.tooltip.x = x + dx
        self.tooltip.y = y + dy

    def hide_tooltip(self) -> None:
        self.tooltip = TooltipState()

    def dispatch(self, node: Node, event: str, x: float = 0.0, y: float = 0.0) -> bool:
        """Run the action `node` registered for `event`. Returns False if none."""
        action = node.handlers.get(event)
        if action is None:
            return False
        if action == TOGGLE_MODE:
            self.toggle()
        elif action == TOOLTIP_SHOW:
            self.show_tooltip(node.datum)
            self.move_tooltip(x, y)
        elif action == TOOLTIP_MOVE:
            self.move_tooltip(x, y)
        elif action == TOOLTIP_HIDE:
            self.hide_tooltip()
        else:
            raise ValueError(f"Unknown action: {action}")
        return True
