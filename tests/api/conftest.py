"""Fixtures for exercising the HTTP API in-process."""
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from jgdshift.main import app
from jgdshift.services.registry import registry

TKY2JGD_PAR = (
    "JGD2000-TokyoDatum Ver.2.1.2\n"
    "MeshCode dB(sec)  dL(sec)\n"
    "54401027  11.49105 -11.80078\n"
    "54401037  11.48732 -11.80198\n"
    "54401028  11.49096 -11.80476\n"
    "54401038  11.48769 -11.80555\n"
    "54401047  11.48373 -11.80318\n"
    "54401048  11.48438 -11.80689\n"
)

SEMI_DYNA_EXE_PAR = (
    "\n" * 16
    + "54401005  -0.00622   0.01516   0.09460\n"
    + "54401055  -0.00620   0.01529   0.08972\n"
    + "54401100  -0.00663   0.01492   0.10374\n"
    + "54401150  -0.00664   0.01506   0.10087\n"
)

ORIGIN = {"latitude": 36.103774791666666, "longitude": 140.08785504166664}


@pytest.fixture
def client() -> Iterator[TestClient]:
    registry.clear()
    with TestClient(app) as test_client:
        yield test_client
    registry.clear()


@pytest.fixture
def loaded_client(client: TestClient) -> TestClient:
    for name, format, content in (
        ("tky2jgd", "TKY2JGD", TKY2JGD_PAR),
        ("semidyna", "SemiDynaEXE", SEMI_DYNA_EXE_PAR),
    ):
        response = client.post(
            "/api/parameters", json={"name": name, "format": format, "content": content}
        )
        assert response.status_code == 201, response.text
    return client


@pytest.fixture
def origin() -> dict:
    return dict(ORIGIN)


@pytest.fixture
def tky2jgd_par() -> str:
    return TKY2JGD_PAR
