import json
import sys
from pathlib import Path

import pytest


def pytest_configure():
    # Ensure `src/` is on sys.path so `import tinyclaw` works without an editable install.
    root = Path(__file__).resolve().parent.parent
    src = root / "src"
    if src.exists():
        p = str(src)
        if p not in sys.path:
            sys.path.insert(0, p)


@pytest.fixture(autouse=True)
def _reset_logger():
    from loguru import logger

    yield
    # The CLI binds a sink to whatever sys.stderr was during the test.
    logger.remove()


@pytest.fixture
def workspace(tmp_path: Path):
    """
    settings.json with three agents, each with a working directory and AGENTS.md.

    Returns a dict with the settings path and a per-agent AGENTS.md path.
    """
    agents = {}
    docs = {}
    for aid, name in (("coder", "Coder"), ("reviewer", "Code Reviewer"), ("writer", "Writer")):
        wd = tmp_path / "agents" / aid
        wd.mkdir(parents=True)
        doc = wd / "AGENTS.md"
        doc.write_text(f"# {name}\n\nYou are the {name.lower()} agent.\n", encoding="utf-8")
        agents[aid] = {"name": name, "provider": "anthropic", "working_directory": str(wd)}
        docs[aid] = doc

    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"workspace": {"name": "demo"}, "agents": agents}, indent=2), encoding="utf-8")
    return {"settings": settings, "docs": docs, "root": tmp_path}
