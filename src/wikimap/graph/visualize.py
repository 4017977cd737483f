"""
HTML export for the visualization surface.

Renders the records held by a ``VisSurface`` (including any highlight
styling currently applied) into a standalone page using vis-network. The
page is a snapshot for viewing; it is never read back.
"""

import json
import webbrowser
from pathlib import Path
from typing import Any, Dict, List, Optional

from .surface import VisSurface

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://unpkg.com/vis-network/standalone/umd/vis-network.min.js"></script>
    <style>
        * { box-sizing: border-box; }

        body {
            margin: 0;
            height: 100vh;
            display: flex;
            flex-direction: column;
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, sans-serif;
            background: #fafafa;
        }

        .header {
            height: 48px;
            display: flex;
            align-items: center;
            gap: 16px;
            padding: 0 16px;
            border-bottom: 1px solid #e0e0e0;
            background: #ffffff;
        }

        .brand { font-weight: 700; }
        .stats { color: #71717a; font-size: 13px; }
        .trace { color: #b45309; font-size: 13px; }

        #graph { flex: 1; }
    </style>
</head>
<body>
    <div class="header">
        <div class="brand">wikimap</div>
        <div class="stats" id="stats"></div>
        <div class="trace" id="trace"></div>
    </div>
    <div id="graph"></div>
    <script>
        const DATA = __DATA__;

        const nodes = new vis.DataSet(DATA.nodes);
        const edges = new vis.DataSet(DATA.edges);

        const network = new vis.Network(document.getElementById('graph'), { nodes, edges }, {
            nodes: {
                shape: 'dot',
                scaling: { min: 20, max: 30, label: { min: 14, max: 30, drawThreshold: 9, maxVisible: 20 } },
                font: { size: 14, face: 'Helvetica Neue, Helvetica, Arial' },
            },
            edges: { arrows: { to: { enabled: true, scaleFactor: 0.5 } }, selectionWidth: 2, hoverWidth: 0 },
            interaction: { hover: true, hoverConnectedEdges: false },
            layout: { improvedLayout: false },
            physics: { barnesHut: { springConstant: 0.002 }, stabilization: { iterations: 100 } },
        });

        document.getElementById('stats').textContent =
            `${DATA.nodes.length} topics, ${DATA.edges.length} links`;
        if (DATA.trace.length) {
            document.getElementById('trace').textContent = DATA.trace.join(' \\u2192 ');
        }
        if (DATA.focus) {
            network.once('stabilized', () => network.focus(DATA.focus, { scale: 1.0 }));
        }
    </script>
</body>
</html>
"""


def build_payload(surface: VisSurface, trace: Optional[List[str]] = None) -> Dict[str, Any]:
    """Collect the records to embed in the page."""
    data = surface.to_dict()
    data["trace"] = trace or []
    return data


def generate_html(surface: VisSurface, trace: Optional[List[str]] = None, title: str = "wikimap") -> str:
    """
    Render the surface as a standalone HTML page.

    Args:
        surface: Surface whose records are drawn.
        trace: Names along the active trace, root first, shown in the header.
        title: Page title.
    """
    payload = json.dumps(build_payload(surface, trace), default=str)
    # Keep embedded titles from closing the script tag
    payload = payload.replace("</", "<\\/")
    return HTML_TEMPLATE.replace("__TITLE__", title).replace("__DATA__", payload)


def export_html(surface: VisSurface, output_path: Path, trace: Optional[List[str]] = None,
                open_browser: bool = False) -> Path:
    """Write the page to ``output_path`` and optionally open it."""
    output_path.write_text(generate_html(surface, trace), encoding="utf-8")
    if open_browser:
        webbrowser.open(f"file://{output_path.absolute()}")
    return output_path
