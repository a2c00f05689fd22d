"""
PORTAL FRAME DEMO
=================
Fixed-base portal from the generator, gravity UDL on the beam and a
lateral point load at the left eave. Prints reactions, checks global
equilibrium and saves the moment diagram and deflected shape.
"""

from structmech.generative import GeometryParams, generate_geometry
from structmech.model import DistributedLoad, LoadDirection, NodalForce
from structmech.solve import solve
from structmech.tables import results_to_frames
from structmech.viz import plot_diagrams


def main():
    params = GeometryParams(width=6.0, height=3.0, E=210e9, A=0.01, I=8.0e-6)
    nodes, elements = generate_geometry("PortalFrame", params)

    w = -2000.0    # N/m, downward on the beam (element 2)
    H = 5000.0     # N, lateral at the left eave (node 2)
    loads = [
        DistributedLoad("gravity", element=2, magnitude=w),
        NodalForce("wind", node=2, magnitude=H, direction=LoadDirection.X),
    ]

    result = solve(nodes, elements, loads)

    print("Portal Frame - UDL + Lateral Load")
    print("=" * 50)
    frames = results_to_frames(result)
    print(frames["reactions"].to_string(index=False))
    print()
    print(frames["elements"].to_string(index=False))

    sum_fx = sum(r.fx for r in result.reactions) + H
    sum_fy = sum(r.fy for r in result.reactions) + w * params.width
    print(f"\nEquilibrium: ΣFx = {sum_fx:.3e} N, ΣFy = {sum_fy:.3e} N")

    ux, uy, _ = result.node_displacement(2)
    print(f"Eave drift (mm): {ux * 1000:.3f}")

    plot_diagrams(nodes, result, "artifacts/portal_moment.png", quantity="moment")
    plot_diagrams(nodes, result, "artifacts/portal_deflection.png", quantity="deflection")
    print("Plots saved to artifacts/")


if __name__ == "__main__":
    main()
