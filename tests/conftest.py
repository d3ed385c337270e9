import pytest
from fastapi.testclient import TestClient

from app.api.routes import get_service
from app.clients.ichiran_client import IchiranClient
from app.main import create_app
from app.services.romanization import RomanizationService

SAMPLE_OUTPUT = """kyō wa ii tenki desu ne

* kyō  今日 【きょう】
1. [n-adv,n-t] today; this day
2. [n-adv,n-t] 《esp. in formal speech》 these days; nowadays

* wa  は
1. [prt] 《pronounced わ in modern Japanese》 indicates sentence topic

* ii  いい
1. [adj-ix] good; excellent; fine
"""


@pytest.fixture
def fake_engine(tmp_path):
    """Write an executable sh script standing in for ichiran-cli."""
    counter = {"n": 0}

    def _make(body: str) -> str:
        counter["n"] += 1
        path = tmp_path / f"ichiran-cli-{counter['n']}"
        path.write_text("#!/bin/sh\n" + body + "\n", encoding="utf-8")
        path.chmod(0o755)
        return str(path)

    return _make


@pytest.fixture
def sample_engine(tmp_path, fake_engine):
    data = tmp_path / "sample.txt"
    data.write_text(SAMPLE_OUTPUT, encoding="utf-8")
    return fake_engine(f'cat "{data}"')


@pytest.fixture
def api_client():
    def _make(executable: str, timeout_seconds: float = 5, max_output_bytes: int = 1024 * 1024):
        app = create_app()
        svc = RomanizationService(
            IchiranClient(executable, timeout_seconds=timeout_seconds, max_output_bytes=max_output_bytes)
        )
        app.dependency_overrides[get_service] = lambda: svc
        return TestClient(app)

    return _make


@pytest.fixture
def sample_output():
    return SAMPLE_OUTPUT
