import pytest

from tinyclaw.errors import IdentifierCollision, InvalidIdentifier, NamespaceConflict
from tinyclaw.teams.identifiers import ensure_available, normalize_agent_ref, normalize_id


def test_normalize_id_lowercases_and_strips_disallowed_chars():
    assert normalize_id("Dev Team!") == "devteam"
    assert normalize_id("  Front_End-2 ") == "front_end-2"
    assert normalize_id("ÄBC") == "bc"


@pytest.mark.parametrize("raw", ["", "   ", "!!!", "ÄÖÜ", None])
def test_normalize_id_rejects_empty_result(raw):
    with pytest.raises(InvalidIdentifier):
        normalize_id(raw)


def test_normalize_agent_ref_removes_whitespace_only():
    assert normalize_agent_ref(" Co der ") == "coder"
    assert normalize_agent_ref("") == ""


def test_ensure_available_reports_team_and_agent_clashes_separately():
    agents = {"coder": {}, "dev": {}}
    teams = {"ops": {}}

    ensure_available("qa", agents, teams)

    with pytest.raises(IdentifierCollision):
        ensure_available("ops", agents, teams)
    with pytest.raises(NamespaceConflict):
        ensure_available("dev", agents, teams)
