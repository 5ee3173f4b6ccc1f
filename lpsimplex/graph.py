"""Plot a two-variable LP: constraint lines, feasible region, vertices and optimum."""

from itertools import combinations
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from lpsimplex.simplex import LPResult, StandardForm, fmt_out

TOL = 1e-9


def _feasible(A, b, p) -> bool:
    x, y = p
    if x < -TOL or y < -TOL:
        return False
    return all(row[0]*x + row[1]*y <= bi + TOL for row, bi in zip(A, b))


def bfs_points(standard: StandardForm) -> List[Tuple[float, float]]:
    """Basic feasible solutions (vertices) of a two-variable LP."""
    A, b = standard.A, standard.b
    # candidate lines: each constraint as equality plus x=0 and y=0, as (a1, a2, rhs)
    lines = [(row[0], row[1], bi) for row, bi in zip(A, b)]
    lines.append((1.0, 0.0, 0.0))
    lines.append((0.0, 1.0, 0.0))
    cand = []
    for i, j in combinations(range(len(lines)), 2):
        a1, a2, bi = lines[i]
        c1, c2, bj = lines[j]
        det = a1*c2 - a2*c1
        if abs(det) < 1e-12:
            continue
        x = (bi*c2 - a2*bj) / det
        y = (a1*bj - bi*c1) / det
        if _feasible(A, b, (x, y)):
            cand.append((x, y))
    uniq = []
    for (x, y) in cand:
        if not any(abs(x-x2) < 1e-7 and abs(y-y2) < 1e-7 for (x2, y2) in uniq):
            uniq.append((x, y))
    return uniq


def plot_2d(standard: StandardForm, res: Optional[LPResult] = None):
    """Return a matplotlib Figure, or None for n != 2 or an empty feasible region."""
    if standard.n != 2:
        return None
    bfs = bfs_points(standard)
    if not bfs:
        return None

    A, b = standard.A, standard.b
    xs = [p[0] for p in bfs]
    ys = [p[1] for p in bfs]
    xmin, xmax = min(0.0, min(xs)), max(1.0, max(xs)*1.2)
    ymin, ymax = min(0.0, min(ys)), max(1.0, max(ys)*1.2)
    grid_x = np.linspace(xmin, xmax, 400)

    fig, ax = plt.subplots(figsize=(6, 6))

    colors = plt.rcParams['axes.prop_cycle'].by_key()['color']
    for i, (row, bi) in enumerate(zip(A, b)):
        a1, a2 = row
        c = colors[i % len(colors)]
        label = f"Constraint {i+1}: {fmt_out(a1)}x1 + {fmt_out(a2)}x2 <= {fmt_out(bi)}"
        if abs(a2) < 1e-12:
            if abs(a1) < 1e-12:
                continue
            ax.axvline(bi/a1, color=c, alpha=0.7, label=label)
        else:
            ax.plot(grid_x, (bi - a1*grid_x)/a2, color=c, alpha=0.7, label=label)

    # Shade feasible region by sampling a grid
    X, Y = np.meshgrid(np.linspace(xmin, xmax, 200), np.linspace(ymin, ymax, 200))
    mask = (X >= -TOL) & (Y >= -TOL)
    for row, bi in zip(A, b):
        mask &= row[0]*X + row[1]*Y <= bi + TOL
    ax.contourf(X, Y, mask.astype(float), levels=[0.5, 1.5], colors=['#e8f7ff'], alpha=0.5)

    if res is not None and res.status == "feasible":
        xopt, yopt = res.solution
        zopt = res.objective
        c1, c2 = standard.c
        if abs(c2) > 1e-12:
            ax.plot(grid_x, (zopt - c1*grid_x)/c2, 'r--', label='iso-profit (through optimum)')
        elif abs(c1) > 1e-12:
            ax.axvline(zopt/c1, color='red', linestyle='--', label='iso-profit (through optimum)')
        ax.plot([xopt], [yopt], 'ro', label=f"optimal ({fmt_out(xopt)}, {fmt_out(yopt)})")
        ax.annotate(f"Z* = {fmt_out(zopt)}", (xopt, yopt), textcoords="offset points", xytext=(8, 8))

        # Highlight the optimal edge when the optimum is not unique
        if res.details.get("alternate_optimal"):
            on_edge = sorted((x, y) for (x, y) in bfs if abs(c1*x + c2*y - zopt) <= 1e-6)
            if len(on_edge) >= 2:
                (x1, y1), (x2, y2) = on_edge[0], on_edge[-1]
                ax.plot([x1, x2], [y1, y2], color='red', linewidth=3, alpha=0.6,
                        label='optimal edge')

    ax.scatter(xs, ys, s=25, color='#444444', alpha=0.9, label='BFS')

    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymin, ymax)
    ax.set_xlabel('x1')
    ax.set_ylabel('x2')
    ax.set_title('Constraints, Feasible Region, Iso-profit')
    ax.legend(loc='best', fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def graph(standard: StandardForm, res: Optional[LPResult] = None):
    """Show the plot in a window (two variables only)."""
    if standard.n != 2:
        print("Graph only supports 2 variables.")
        return
    fig = plot_2d(standard, res)
    if fig is None:
        print("No feasible region to plot (empty or numerical issues).")
        return
    plt.show()
