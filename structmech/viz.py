"""
VISUALIZATION: FORCE DIAGRAMS AND DEFORMED SHAPES
=================================================

PURPOSE:
--------
Draw the result of one analysis over the structure itself:

- axial / shear / moment diagrams, offset perpendicular to each member
- the deflected shape, exaggerated by a scale factor

Figures are written to a file and closed; nothing is shown interactively,
so the functions work on servers without a display.

DRAWING CONVENTIONS:
--------------------
- Axial and shear are drawn along the member's local +y side.
- Moment is drawn on the tension side (sagging moment below a beam).
- Deflected shape follows each member's sampled stations, so curvature
  between nodes is visible, not just straight chords.
"""

import os
from typing import Dict, Iterable, Optional, Union

import numpy as np
import matplotlib.pyplot as plt

from .model import Node
from .post import AnalysisResult

COLORS = {
    'structure_primary': '#2C3E50',      # Dark blue-gray (undeformed)
    'structure_secondary': '#E74C3C',    # Coral red (deformed)
    'axial': '#3498DB',
    'shear': '#27AE60',
    'moment': '#9B59B6',
    'support': '#8B7355',
    'background': '#FAFAFA',
}

QUANTITIES = ("axial", "shear", "moment", "deflection")

UNITS = {"axial": "N", "shear": "N", "moment": "N·m", "deflection": "scaled"}


def _node_map(nodes: Union[Dict[int, Node], Iterable[Node]]) -> Dict[int, Node]:
    if isinstance(nodes, dict):
        return nodes
    return {n.id: n for n in nodes}


def _extent(nodes: Dict[int, Node]) -> float:
    if not nodes:
        return 1.0
    xs = [n.x for n in nodes.values()]
    ys = [n.y for n in nodes.values()]
    return max(max(xs) - min(xs), max(ys) - min(ys), 1.0)


def _undeformed_axis(er):
    """Undeformed station coordinates of one member."""
    xs = np.array([st.x for st in er.stations])
    first = er.stations[0]
    # the first station is the start node, displaced by (u_i, v_i) in local axes
    u0, v0 = er.local_displacement[0], er.local_displacement[1]
    x0 = first.global_x - (u0 * er.c - v0 * er.s)
    y0 = first.global_y - (u0 * er.s + v0 * er.c)
    return x0 + xs * er.c, y0 + xs * er.s


def _auto_scale(result: AnalysisResult, quantity: str, extent: float) -> float:
    """Largest ordinate drawn at 15% of the structure size."""
    if quantity == "deflection":
        peak = 0.0
        for er in result.elements:
            base_x, base_y = _undeformed_axis(er)
            gx = np.array([st.global_x for st in er.stations])
            gy = np.array([st.global_y for st in er.stations])
            peak = max(peak, float(np.hypot(gx - base_x, gy - base_y).max()))
    else:
        peak = max(
            (max(abs(getattr(st, quantity)) for st in er.stations) for er in result.elements),
            default=0.0,
        )
    return 0.15 * extent / peak if peak > 1e-12 else 1.0


def _draw_supports(ax, nodes: Dict[int, Node], size: float) -> None:
    for n in nodes.values():
        if not n.is_support:
            continue
        rx, ry, rm = n.restraints
        if rm:
            ax.plot([n.x - size, n.x + size], [n.y, n.y], '-', color=COLORS['support'],
                    linewidth=4, zorder=4)
        else:
            tri_x = [n.x - size, n.x, n.x + size, n.x - size]
            tri_y = [n.y - size, n.y, n.y - size, n.y - size]
            style = '-' if (rx and ry) else '--'
            ax.plot(tri_x, tri_y, style, color=COLORS['support'], linewidth=2, zorder=4)


def plot_diagrams(
    nodes: Union[Dict[int, Node], Iterable[Node]],
    result: AnalysisResult,
    outpath: str,
    quantity: str = "moment",
    scale: Optional[float] = None,
    title: Optional[str] = None,
) -> None:
    """
    Plot one result quantity over the whole structure and save it.

    Parameters:
    -----------
    nodes : dict or iterable of Node
        The analysed nodes (undeformed geometry)
    result : AnalysisResult
        Output of ``solve``
    outpath : str
        File to write (.png, .pdf, .svg); parent directory is created
    quantity : str
        "axial", "shear", "moment" or "deflection"
    scale : float, optional
        Drawing units per result unit. Chosen automatically when omitted.
    title : str, optional
    """
    if quantity not in QUANTITIES:
        raise ValueError(f"quantity must be one of {QUANTITIES}, got {quantity!r}")

    nodes = _node_map(nodes)
    extent = _extent(nodes)
    if scale is None:
        scale = _auto_scale(result, quantity, extent)

    fig, ax = plt.subplots(figsize=(12, 8))
    fig.patch.set_facecolor(COLORS['background'])

    for er in result.elements:
        base_x, base_y = _undeformed_axis(er)
        ax.plot(base_x, base_y, '-', color=COLORS['structure_primary'], linewidth=3,
                alpha=0.7, zorder=1)

        if quantity == "deflection":
            gx = np.array([st.global_x for st in er.stations])
            gy = np.array([st.global_y for st in er.stations])
            ax.plot(base_x + scale * (gx - base_x), base_y + scale * (gy - base_y),
                    '--', color=COLORS['structure_secondary'], linewidth=2, zorder=2)
            continue

        values = np.array([getattr(st, quantity) for st in er.stations])
        sign = -1.0 if quantity == "moment" else 1.0
        off_x = base_x + sign * scale * values * (-er.s)
        off_y = base_y + sign * scale * values * er.c
        color = COLORS[quantity]
        ax.plot(off_x, off_y, '-', color=color, linewidth=1.5, zorder=2)
        ax.fill(np.concatenate([base_x, off_x[::-1]]), np.concatenate([base_y, off_y[::-1]]),
                color=color, alpha=0.2, zorder=1)

        k = int(np.argmax(np.abs(values)))
        if abs(values[k]) > 1e-9:
            ax.annotate(f"{values[k]:.3g}", (off_x[k], off_y[k]), fontsize=9,
                        color=color, ha='center')

    ax.plot([n.x for n in nodes.values()], [n.y for n in nodes.values()], 'o',
            color=COLORS['structure_primary'], markersize=6, zorder=3)
    _draw_supports(ax, nodes, 0.03 * extent)

    if title is None:
        title = f"{quantity.capitalize()} ({UNITS[quantity]})"
    ax.set_title(title, fontsize=14, fontweight='bold', pad=20)
    ax.set_xlabel('x (m)', fontsize=12)
    ax.set_ylabel('y (m)', fontsize=12)
    ax.grid(True, alpha=0.3, linestyle='--')
    ax.set_aspect('equal')
    ax.text(0.02, 0.98, f'Diagram scale: ×{scale:.3g}', transform=ax.transAxes,
            fontsize=9, verticalalignment='top',
            bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)

    plt.tight_layout()
    plt.savefig(outpath, dpi=150, bbox_inches='tight', facecolor=COLORS['background'])
    plt.close(fig)
