from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from mcp_test_runner.config import ServerConfig


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def server_config(project_dir: Path) -> ServerConfig:
    return ServerConfig(project_dir=project_dir, drain_delay=0, debounce_delay=0.05)


@pytest.fixture
def mock_session() -> MagicMock:
    """A RunSession double with one reported file holding a pass and a failure."""
    session = MagicMock()
    session.start = AsyncMock()
    session.watch = AsyncMock()
    session.close = AsyncMock()
    session.last_results = []
    session.reported_files.return_value = [
        {
            "name": "tests/test_math.py",
            "children": [
                {"name": "a", "status": "passed"},
                {"name": "b", "status": "failed", "error": {"message": "expected 1 to equal 2"}},
            ],
        }
    ]
    return session


@pytest.fixture
def mock_runner(mock_session: MagicMock) -> MagicMock:
    runner = MagicMock()
    runner.name = "fake"
    runner.start_session = AsyncMock(return_value=mock_session)
    return runner


@pytest.fixture
def sample_project(project_dir: Path) -> Path:
    """A tiny pytest project: one module with a class, a nested class and module-level tests."""
    tests_dir = project_dir / "tests"
    tests_dir.mkdir()
    (tests_dir / "test_math.py").write_text(
        "import pytest\n"
        "\n"
        "\n"
        "class TestAdd:\n"
        "    def test_ints(self):\n"
        "        assert 1 + 1 == 2\n"
        "\n"
        "    class TestNested:\n"
        "        def test_wrong(self):\n"
        "            assert 1 == 2, 'expected 1 to equal 2'\n"
        "\n"
        "\n"
        "@pytest.mark.skip(reason='not today')\n"
        "def test_skipped():\n"
        "    pass\n"
    )
    (tests_dir / "test_other.py").write_text("def test_other():\n    assert True\n")
    return project_dir
