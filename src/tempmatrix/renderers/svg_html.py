"""Interactive HTML renderer for the temperature matrix.

Produces a self-contained HTML string (SVG + JS) for embedding via
st.components.v1.html() or saving to disk. Geometry and both colour sets are
computed in Python; the page script only executes the named pointer actions
that the scene attached to each cell:

  tooltip-show / tooltip-move / tooltip-hide  hover label that follows the pointer
  toggle-mode                                 flip Maximum ↔ Minimum for every cell
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

from tempmatrix.config import TRANSITION_MS
from tempmatrix.interaction import TOOLTIP_OFFSET
from tempmatrix.models import Dataset
from tempmatrix.renderers.matrix import build_matrix_scene

logger = logging.getLogger(__name__)

_BG = "#ffffff"
_TEXT = "#333333"
_LINE_MAX = "#5a1a1a"
_LINE_MIN = "#2b5c8a"


def render_matrix_html(dataset: Dataset, title: str = "Monthly Temperature Matrix") -> str:
    """Return a self-contained HTML page with the interactive matrix.

    The page owns the mode indicator (`#mode-label strong`) and the floating
    tooltip (`#tooltip`); the script only writes their text, visibility and
    position. Cell fills change with a CSS transition on toggle.

    Args:
        dataset: Aggregated dataset to draw.
        title: Page heading.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    scene = build_matrix_scene(dataset)
    svg = scene.surface.to_svg()
    mode = scene.controller.field.indicator
    dx, dy = TOOLTIP_OFFSET
    heading = html.escape(title)

    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{heading}</title>
<style>
body {{
    margin: 0;
    padding: 1rem;
    background: {_BG};
    color: {_TEXT};
    font-family: "Helvetica Neue", Arial, sans-serif;
}}
h2 {{ margin: 0 0 0.25rem; font-weight: 600; }}
#mode-label {{ margin-bottom: 0.5rem; font-size: 0.9rem; }}
.axis text {{ font-size: 12px; fill: {_TEXT}; }}
.legend-label {{ font-size: 11px; fill: {_TEXT}; }}
.cell {{
    cursor: pointer;
    stroke: #ffffff;
    stroke-width: 1;
    transition: fill {TRANSITION_MS}ms ease;
}}
.line-max, .line-min {{ pointer-events: none; stroke-width: 1.2; }}
.line-max {{ stroke: {_LINE_MAX}; }}
.line-min {{ stroke: {_LINE_MIN}; }}
#tooltip {{
    position: absolute;
    opacity: 0;
    pointer-events: none;
    background: rgba(255,255,255,0.95);
    border: 1px solid #999999;
    border-radius: 4px;
    padding: 4px 8px;
    font-size: 12px;
    line-height: 1.4;
}}
</style>
</head>
<body>
<h2>{heading}</h2>
<div id="mode-label">Colour shows monthly <strong>{mode}</strong> temperature (click any cell to switch)</div>
<div id="chart">
{svg}
</div>
<div id="tooltip"></div>
<script>
(function() {{
  var showMax = {"true" if scene.controller.mode.show_max else "false"};
  var tooltip = document.getElementById('tooltip');
  var label = document.querySelector('#mode-label strong');
  var cells = document.querySelectorAll('.cell');

  function field(el) {{
    return showMax ? el.getAttribute('data-max') : el.getAttribute('data-min');
  }}

  var actions = {{
    'tooltip-show': function(el, e) {{
      tooltip.innerHTML = '<strong>' + el.getAttribute('data-key') + '</strong><br/>'
        + (showMax ? 'Max' : 'Min') + ': ' + Number(field(el)) + ' °C';
      tooltip.style.opacity = 1;
      actions['tooltip-move'](el, e);
    }},
    'tooltip-move': function(el, e) {{
      tooltip.style.left = (e.pageX + {dx}) + 'px';
      tooltip.style.top = (e.pageY + {dy}) + 'px';
    }},
    'tooltip-hide': function() {{
      tooltip.style.opacity = 0;
    }},
    'toggle-mode': function() {{
      showMax = !showMax;
      label.textContent = showMax ? 'Maximum' : 'Minimum';
      for (var i = 0; i < cells.length; i++) {{
        var c = cells[i];
        c.style.fill = showMax ? c.getAttribute('data-fill-max') : c.getAttribute('data-fill-min');
      }}
    }}
  }};

  ['pointerenter', 'pointermove', 'pointerleave', 'click'].forEach(function(evt) {{
    for (var i = 0; i < cells.length; i++) {{
      (function(el) {{
        var name = el.getAttribute('data-on-' + evt);
        if (!name || !actions[name]) return;
        el.addEventListener(evt, function(e) {{ actions[name](el, e); }});
      }})(cells[i]);
    }}
  }});
}})();
</script>
</body>
</html>"""


def save_matrix_html(dataset: Dataset, output_path: Path) -> Path:
    """Write the interactive page to `output_path` and return it."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_matrix_html(dataset), encoding="utf-8")
    logger.info(f"Saved interactive matrix: {output_path}")
    return output_path
