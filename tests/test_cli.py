import json

from builders import CONTRACT, PROPOSER, VOTER
from click.testing import CliRunner

from govind.cli import cli
from govind.storage.queries import fetch_proposals, fetch_votes


def _write_ledger(path, seq: int, events: list[dict]) -> None:
    doc = {
        "ledger_sequence": seq,
        "tx_processing": [
            {"tx_hash": f"tx{seq}", "tx_apply_processing": {"version": 3, "soroban_meta": {"events": events}}}
        ],
    }
    path.write_text(json.dumps(doc))


def _event(symbol: str, topics: list[dict], data: dict | None = None) -> dict:
    body = {"version": 0, "topics": [{"type": "symbol", "value": symbol}, *topics]}
    if data is not None:
        body["data"] = data
    return {"contract_id": CONTRACT.hex(), "body": body}


def _ledgers(tmp_path):
    created = _event(
        "proposal_created",
        [{"type": "u32", "value": 1}, {"type": "address", "value": PROPOSER.to_strkey()}],
        {
            "type": "vec",
            "value": [
                {"type": "string", "value": "Fund grants"},
                {"type": "string", "value": "Send 1000 to the grants pool"},
                {"type": "void"},
            ],
        },
    )
    vote = _event(
        "vote_cast",
        [{"type": "u32", "value": 1}, {"type": "address", "value": VOTER.to_strkey()}],
        {"type": "vec", "value": [{"type": "u32", "value": 1}, {"type": "i128", "value": "250"}]},
    )
    updated = _event("proposal_updated", [{"type": "u32", "value": 1}, {"type": "u32", "value": 4}])

    first, second = tmp_path / "a.json", tmp_path / "b.json"
    # file order is deliberately reversed; ledgers must run by sequence
    _write_ledger(first, 101, [vote, updated])
    _write_ledger(second, 100, [created])
    return first, second


def test_index_command(tmp_path) -> None:
    db = tmp_path / "gov.duckdb"
    first, second = _ledgers(tmp_path)

    result = CliRunner().invoke(cli, ["index", str(first), str(second), "--db", str(db)])

    assert result.exit_code == 0, result.output
    assert "writes=3" in result.output
    proposals = fetch_proposals(db)
    assert proposals.iloc[0]["status"] == 4
    assert fetch_votes(db)["amount"].tolist() == ["250"]


def test_index_command_reports_failures(tmp_path) -> None:
    db = tmp_path / "gov.duckdb"
    path = tmp_path / "orphan.json"
    _write_ledger(path, 5, [_event("proposal_updated", [{"type": "u32", "value": 9}, {"type": "u32", "value": 1}])])

    result = CliRunner().invoke(cli, ["index", str(path), "--db", str(db)])
    assert result.exit_code == 0, result.output
    assert "failures=1" in result.output

    result = CliRunner().invoke(cli, ["index", str(path), "--db", str(db), "--on-store-error", "raise"])
    assert result.exit_code != 0
    assert "ledger 5" in result.output


def test_index_command_bad_file(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("[]")

    result = CliRunner().invoke(cli, ["index", str(path), "--db", str(tmp_path / "gov.duckdb")])

    assert result.exit_code != 0


def test_read_and_export_commands(tmp_path) -> None:
    db = tmp_path / "gov.duckdb"
    first, second = _ledgers(tmp_path)
    runner = CliRunner()
    assert runner.invoke(cli, ["index", str(first), str(second), "--db", str(db)]).exit_code == 0

    result = runner.invoke(cli, ["proposals", "--db", str(db)])
    assert result.exit_code == 0, result.output
    assert "proposals" in result.output

    result = runner.invoke(cli, ["votes", "--db", str(db), "--proposal", "1"])
    assert result.exit_code == 0, result.output

    out = tmp_path / "parquet"
    result = runner.invoke(cli, ["export", "--db", str(db), "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert (out / "votes.parquet").is_file()
    assert (out / "proposals.parquet").is_file()


def test_catalog_command() -> None:
    result = CliRunner().invoke(cli, ["catalog"])

    assert result.exit_code == 0
    assert "vote_cast" in result.output
    assert "proposal_updated" in result.output


def test_index_command_skips_unmodelled_values(tmp_path) -> None:
    db = tmp_path / "gov.duckdb"
    path = tmp_path / "ledger.json"
    transfer = _event("transfer", [], {"type": "u256", "value": "5"})
    vote = _event(
        "vote_cast",
        [{"type": "u32", "value": 1}, {"type": "address", "value": VOTER.to_strkey()}],
        {"type": "vec", "value": [{"type": "u32", "value": 1}, {"type": "i128", "value": "250"}]},
    )
    _write_ledger(path, 100, [transfer, vote])

    result = CliRunner().invoke(cli, ["index", str(path), "--db", str(db)])

    assert result.exit_code == 0, result.output
    assert fetch_votes(db)["amount"].tolist() == ["250"]


def test_read_commands_on_missing_db(tmp_path) -> None:
    db = tmp_path / "missing.duckdb"
    runner = CliRunner()

    for args in (["proposals"], ["votes"], ["export", "--out", str(tmp_path / "out")]):
        result = runner.invoke(cli, [*args, "--db", str(db)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "missing.duckdb" in result.output
