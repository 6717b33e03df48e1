import pytest
from unittest.mock import MagicMock, patch

from conftest import BASE_3668, DRPC_BASE, REVERSE_VERIFIER, TEAMNICK_VERIFIER
from lookup_errors import MalformedEncodingError, NoResolverFoundError, RegistryUnavailableError
from name_codec import dns_encode
from unruggable_finder import UnruggableFinder, find_unruggable, main


def test_teamnick(registry_snapshot):
    verifier, gateways = find_unruggable(dns_encode("raffy.teamnick.eth"), registry_snapshot)
    assert verifier == TEAMNICK_VERIFIER
    assert gateways == [DRPC_BASE]


def test_reverse_primary(registry_snapshot):
    finder = UnruggableFinder(registry_snapshot)
    result = finder.find_unruggable(dns_encode("51050ec063d393217b436747617ad1c2285aeeee.80002105.reverse"))
    assert result.verifier == REVERSE_VERIFIER
    assert result.gateways == [DRPC_BASE, BASE_3668]


def test_find_by_name(registry_snapshot):
    assert UnruggableFinder(registry_snapshot).find("teamnick.eth").verifier == TEAMNICK_VERIFIER


def test_no_resolver(registry_snapshot):
    with pytest.raises(NoResolverFoundError):
        UnruggableFinder(registry_snapshot).find("raffy.example")


def test_malformed_propagates(registry_snapshot):
    with pytest.raises(MalformedEncodingError):
        find_unruggable(b"\x05raffy", registry_snapshot)
    assert registry_snapshot.queried == []


def test_registry_unavailable_propagates():
    registry = MagicMock()
    registry.lookup.side_effect = RegistryUnavailableError("down")
    with pytest.raises(RegistryUnavailableError):
        UnruggableFinder(registry).find("raffy.teamnick.eth")


def test_no_caching_between_calls(registry_snapshot):
    finder = UnruggableFinder(registry_snapshot)
    assert finder.find("raffy.teamnick.eth").verifier == TEAMNICK_VERIFIER
    registry_snapshot.register("raffy.teamnick.eth", REVERSE_VERIFIER, [BASE_3668])
    assert finder.find("raffy.teamnick.eth") == (REVERSE_VERIFIER, [BASE_3668])


@patch("unruggable_finder.build_registry")
def test_main(mock_build, registry_snapshot, capsys):
    mock_build.return_value = registry_snapshot
    assert main(["raffy.teamnick.eth"]) == 0
    out = capsys.readouterr().out
    assert f"✅ raffy.teamnick.eth -> {TEAMNICK_VERIFIER}" in out
    assert DRPC_BASE in out


@patch("unruggable_finder.build_registry")
def test_main_defaults_to_known_names(mock_build, registry_snapshot, capsys):
    mock_build.return_value = registry_snapshot
    assert main([]) == 0
    out = capsys.readouterr().out
    assert REVERSE_VERIFIER in out
    assert BASE_3668 in out


@patch("unruggable_finder.build_registry")
def test_main_reports_failures(mock_build, registry_snapshot, capsys):
    mock_build.return_value = registry_snapshot
    assert main(["nobody.example", "a..eth"]) == 1
    assert capsys.readouterr().out.count("❌") == 2


@patch("unruggable_finder.build_registry")
def test_main_missing_config(mock_build, capsys):
    mock_build.side_effect = RuntimeError("Missing RPC_URL")
    assert main(["raffy.teamnick.eth"]) == 2
    assert "Missing RPC_URL" in capsys.readouterr().out


def test_find_normalizes_typed_name(registry_snapshot):
    verifier, gateways = UnruggableFinder(registry_snapshot).find("Raffy.TeamNick.eth")
    assert verifier == TEAMNICK_VERIFIER
    assert gateways == [DRPC_BASE]


def test_find_rejects_unnormalizable_name(registry_snapshot):
    with pytest.raises(MalformedEncodingError):
        UnruggableFinder(registry_snapshot).find("a_b.teamnick.eth")
    assert registry_snapshot.queried == []


@patch("unruggable_finder.build_registry")
def test_main_mixed_case(mock_build, registry_snapshot, capsys):
    mock_build.return_value = registry_snapshot
    assert main(["Raffy.TeamNick.eth"]) == 0
    assert TEAMNICK_VERIFIER in capsys.readouterr().out


@patch("unruggable_finder.load_settings")
def test_main_bad_settings(mock_load, capsys):
    mock_load.side_effect = RuntimeError("Invalid REGISTRY_RETRIES='x' in .env file (expected int)")
    assert main(["raffy.teamnick.eth"]) == 2
    assert "REGISTRY_RETRIES" in capsys.readouterr().out
