"""Shared parameter sets for the transformation tests.

Rows are excerpts of the published TKY2JGD.par, touchi.par (PatchJGD_HV) and
SemiDynaEXE2023.par files.
"""
import pytest

from jgdshift.services.engine import Transformer
from jgdshift.services.formats import Format
from jgdshift.services.point import Parameter, Point

TKY2JGD_ROWS = {
    54401027: Parameter(11.49105, -11.80078, 0.0),
    54401037: Parameter(11.48732, -11.80198, 0.0),
    54401028: Parameter(11.49096, -11.80476, 0.0),
    54401038: Parameter(11.48769, -11.80555, 0.0),
    54401047: Parameter(11.48373, -11.80318, 0.0),
    54401048: Parameter(11.48438, -11.80689, 0.0),
}

PATCH_JGD_HV_ROWS = {
    57413454: Parameter(-0.05984, 0.22393, -1.25445),
    57413464: Parameter(-0.06011, 0.22417, -1.24845),
    57413455: Parameter(-0.0604, 0.2252, -1.29),
    57413465: Parameter(-0.06064, 0.22523, -1.27667),
    57413474: Parameter(-0.06037, 0.22424, -0.35308),
    57413475: Parameter(-0.06089, 0.22524, 0.0),
}

SEMI_DYNA_EXE_ROWS = {
    54401005: Parameter(-0.00622, 0.01516, 0.0946),
    54401055: Parameter(-0.0062, 0.01529, 0.08972),
    54401100: Parameter(-0.00663, 0.01492, 0.10374),
    54401150: Parameter(-0.00664, 0.01506, 0.10087),
}

# Tsukuba, Tokyo Datum.
ORIGIN = Point(36.103774791666666, 140.08785504166664, 0.0)


@pytest.fixture
def tky2jgd() -> Transformer:
    return Transformer(Format.TKY2JGD, dict(TKY2JGD_ROWS))


@pytest.fixture
def tky2jgd_extended() -> Transformer:
    # Adds the western column so the Newton solver can start one cell west of
    # the solution.
    rows = dict(TKY2JGD_ROWS)
    rows[54401026] = Parameter(11.49300, -11.79000, 0.0)
    rows[54401036] = Parameter(11.48500, -11.79300, 0.0)
    return Transformer(Format.TKY2JGD, rows)


@pytest.fixture
def patch_jgd_hv() -> Transformer:
    return Transformer(Format.PatchJGD_HV, dict(PATCH_JGD_HV_ROWS))


@pytest.fixture
def semi_dyna_exe() -> Transformer:
    return Transformer(Format.SemiDynaEXE, dict(SEMI_DYNA_EXE_ROWS))


@pytest.fixture
def origin() -> Point:
    return ORIGIN
