"""
TRUSS DEMO
==========
Pin-jointed truss from the generator (every member released at both ends),
panel-point loads on the top chord. Member forces are purely axial.
"""

from structmech.generative import GeometryParams, generate_geometry
from structmech.model import NodalForce
from structmech.solve import solve
from structmech.tables import results_to_frames
from structmech.viz import plot_diagrams


def main():
    params = GeometryParams(width=12.0, height=2.0, num_spans=4)
    nodes, elements = generate_geometry("Truss", params)

    top_chord = [n for n in nodes if n.y > 0.0]
    loads = [NodalForce(f"P{n.id}", node=n.id, magnitude=-10_000.0) for n in top_chord]

    result = solve(nodes, elements, loads)
    frames = results_to_frames(result)

    print("Truss - Top Chord Panel Loads")
    print("=" * 50)
    print(frames["reactions"].to_string(index=False))
    print()
    summary = frames["elements"][["element", "length", "N_i", "max_moment"]]
    print(summary.to_string(index=False))
    print(f"\nLargest |N| (kN): {summary['N_i'].abs().max() / 1000:.2f}")

    plot_diagrams(nodes, result, "artifacts/truss_axial.png", quantity="axial")
    print("Plot saved to artifacts/truss_axial.png")


if __name__ == "__main__":
    main()
