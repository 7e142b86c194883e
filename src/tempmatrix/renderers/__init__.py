"""Output renderers: interactive HTML/SVG, Plotly and static PNG."""
