import numpy as np

from structmech.model import Node, Frame2D, PointLoad, Support
from structmech.solve import solve
from structmech.tables import results_to_frames
from structmech.viz import plot_diagrams


def main():
    """
    SIMPLY SUPPORTED BEAM - OFF-CENTRE POINT LOAD
    =============================================
    One element, pinned at the left, roller at the right, load P at a = L/4.
    The load sits INSIDE the element: no extra node is needed, the
    fixed-end forces carry it into the stiffness solution and the
    diagrams pick up the jump in shear exactly at a.
    """

    # ========================================================================
    # SETUP
    # ========================================================================
    L = 8.0      # Beam length (m)
    E = 210e9    # Steel (Pa)
    I = 8.0e-6   # Second moment of area (m⁴)
    A = 0.01     # Area (m²)
    P = 1000.0   # Load (N), acting downward
    a = L / 4
    b = L - a

    nodes = [
        Node(1, 0.0, 0.0, Support.PINNED.value),
        Node(2, L, 0.0, Support.ROLLER.value),
    ]
    elements = [Frame2D(1, 1, 2, E=E, A=A, I=I)]
    loads = [PointLoad("P1", element=1, magnitude=-P, position=a / L)]

    result = solve(nodes, elements, loads)

    # ========================================================================
    # PRINT RESULTS
    # ========================================================================
    beam = result.element(1)
    M_max = max(st.moment for st in beam.stations)

    print("Simply Supported Beam - Point Load at L/4")
    print("=" * 50)
    print(f"Left reaction (N):  {result.reaction(1).fy:.2f}   expected {P * b / L:.2f}")
    print(f"Right reaction (N): {result.reaction(2).fy:.2f}   expected {P * a / L:.2f}")
    print(f"Max moment (N·m):   {M_max:.2f}   expected {P * a * b / L:.2f} (sagging)")
    print(f"Max |deflection| (m): {beam.max_deflection:.6e}")
    print()

    frames = results_to_frames(result)
    print(frames["elements"].to_string(index=False))

    plot_diagrams(nodes, result, "artifacts/simply_supported_moment.png", quantity="moment")
    plot_diagrams(nodes, result, "artifacts/simply_supported_deflection.png", quantity="deflection")
    print("\nPlots saved to artifacts/")


if __name__ == "__main__":
    main()
