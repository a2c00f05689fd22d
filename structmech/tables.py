# structmech/tables.py
"""
RESULT TABLES
=============

Flatten an AnalysisResult into pandas DataFrames for reports, CSV export
and quick inspection:

    frames = results_to_frames(result)
    frames["elements"].sort_values("max_moment", ascending=False)

Values are passed through ``clean_value`` so tables show 12.5 rather than
12.499999999998. Use the AnalysisResult itself for further computation.
"""

from typing import Dict

import pandas as pd

from .diagrams import clean_value
from .post import AnalysisResult

STATION_COLUMNS = ["element", "x", "axial", "shear", "moment", "deflection", "global_x", "global_y"]
REACTION_COLUMNS = ["node", "fx", "fy", "m"]
ELEMENT_COLUMNS = [
    "element", "length",
    "N_i", "V_i", "M_i", "N_j", "V_j", "M_j",
    "max_axial", "max_shear", "max_moment", "max_deflection",
]


def stations_frame(result: AnalysisResult) -> pd.DataFrame:
    """One row per sampled station of every element."""
    rows = []
    for er in result.elements:
        for st in er.stations:
            rows.append({
                "element": er.element_id,
                "x": clean_value(st.x),
                "axial": clean_value(st.axial),
                "shear": clean_value(st.shear),
                "moment": clean_value(st.moment),
                "deflection": clean_value(st.deflection),
                # coordinates are not snapped
                "global_x": round(st.global_x, 6),
                "global_y": round(st.global_y, 6),
            })
    return pd.DataFrame(rows, columns=STATION_COLUMNS)


def reactions_frame(result: AnalysisResult) -> pd.DataFrame:
    rows = [
        {"node": r.node_id, "fx": clean_value(r.fx), "fy": clean_value(r.fy), "m": clean_value(r.m)}
        for r in result.reactions
    ]
    return pd.DataFrame(rows, columns=REACTION_COLUMNS)


def elements_frame(result: AnalysisResult) -> pd.DataFrame:
    """
    Element summary: length, section forces at both ends (x = 0 and x = L,
    diagram sign convention) and absolute maxima along the member.
    """
    rows = []
    for er in result.elements:
        fi, fj = er.start_forces, er.end_forces_j
        rows.append({
            "element": er.element_id,
            "length": clean_value(er.length),
            "N_i": clean_value(-fi.fx),
            "V_i": clean_value(fi.fy),
            "M_i": clean_value(-fi.m),
            "N_j": clean_value(fj.fx),
            "V_j": clean_value(-fj.fy),
            "M_j": clean_value(fj.m),
            "max_axial": clean_value(er.max_axial),
            "max_shear": clean_value(er.max_shear),
            "max_moment": clean_value(er.max_moment),
            "max_deflection": clean_value(er.max_deflection),
        })
    return pd.DataFrame(rows, columns=ELEMENT_COLUMNS)


def results_to_frames(result: AnalysisResult) -> Dict[str, pd.DataFrame]:
    """
    Returns:
    --------
    dict with keys "stations", "reactions", "elements"
        Empty (but correctly columned) frames for an empty result.
    """
    return {
        "stations": stations_frame(result),
        "reactions": reactions_frame(result),
        "elements": elements_frame(result),
    }
