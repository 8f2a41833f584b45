import enum
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from jgdshift.services.mesh import MeshUnit

Columns = Optional[Tuple[int, int]]


@dataclass(frozen=True)
class ParLayout:
    """Fixed-column layout of a par file; ``None`` columns are zero-filled."""

    header: int
    meshcode: Tuple[int, int]
    latitude: Columns
    longitude: Columns
    altitude: Columns


class Format(str, enum.Enum):
    TKY2JGD = "TKY2JGD"
    PatchJGD = "PatchJGD"
    PatchJGD_H = "PatchJGD_H"
    PatchJGD_HV = "PatchJGD_HV"
    HyokoRev = "HyokoRev"
    SemiDynaEXE = "SemiDynaEXE"
    geonetF3 = "geonetF3"
    ITRF2014 = "ITRF2014"

    def mesh_unit(self) -> MeshUnit:
        if self in _FIVE_MESH:
            return MeshUnit.FIVE
        return MeshUnit.ONE

    def layout(self) -> ParLayout:
        return PAR_LAYOUTS[self]

    def summary(self) -> str:
        return FORMAT_SUMMARIES[self]


_FIVE_MESH = frozenset({Format.SemiDynaEXE, Format.geonetF3, Format.ITRF2014})


PAR_LAYOUTS: Dict[Format, ParLayout] = {
    Format.TKY2JGD: ParLayout(2, (0, 8), (9, 18), (19, 28), None),
    Format.PatchJGD: ParLayout(16, (0, 8), (9, 18), (19, 28), None),
    Format.PatchJGD_H: ParLayout(16, (0, 8), None, None, (9, 18)),
    Format.PatchJGD_HV: ParLayout(16, (0, 8), (9, 18), (19, 28), (29, 38)),
    Format.HyokoRev: ParLayout(16, (0, 8), None, None, (12, 21)),
    Format.SemiDynaEXE: ParLayout(16, (0, 8), (9, 18), (19, 28), (29, 38)),
    Format.geonetF3: ParLayout(18, (0, 8), (12, 21), (22, 31), (32, 41)),
    Format.ITRF2014: ParLayout(18, (0, 8), (12, 21), (22, 31), (32, 41)),
}


FORMAT_SUMMARIES: Dict[Format, str] = {
    Format.TKY2JGD: "Tokyo Datum to JGD2000 (horizontal)",
    Format.PatchJGD: "JGD2000 to JGD2011 crustal deformation patch (horizontal)",
    Format.PatchJGD_H: "JGD2000 to JGD2011 crustal deformation patch (height)",
    Format.PatchJGD_HV: "JGD2000 to JGD2011 crustal deformation patch (horizontal and height)",
    Format.HyokoRev: "Height revision of vertical benchmarks",
    Format.SemiDynaEXE: "Semi-dynamic correction between observation and reference epochs",
    Format.geonetF3: "GEONET F3 solution to JGD2011 (POS2JGD)",
    Format.ITRF2014: "ITRF2014 to JGD2011 (POS2JGD)",
}
