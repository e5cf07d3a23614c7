from scripts.compat_report import format_rows, main, run_matrix
from schemacompat.codec import create_codec


def _by_subject(rows):
    return {r["subject"]: r for r in rows}


def test_matrix_under_strict_codec():
    rows = run_matrix(create_codec("json"))
    assert len([r for r in rows if r["kind"] == "record"]) == 5
    assert len([r for r in rows if r["kind"] == "exchange"]) == 4
    by = _by_subject(rows)

    assert by["GreetingRequest"]["mode"] == "FORWARD"
    assert by["Greeting"]["mode"] == "BACKWARD"
    assert by["Profile"]["mode"] == "NONE"
    assert by["Profile"]["added"] == ["favorite_band"]
    assert by["Profile"]["removed"] == ["favorite_thing"]
    assert all(r["matches_prediction"] for r in rows if r["kind"] == "record")

    assert by["client v0 -> server v1"]["ok"] is True
    assert by["client v1 -> server v0"]["ok"] is False
    assert by["client v1 -> server v0"]["failed_hop"] == "response"


def test_matrix_under_defaulting_codec():
    rows = run_matrix(create_codec("defaulting"))
    assert {r["mode"] for r in rows if r["kind"] == "record"} == {"FULL"}
    assert all(r["ok"] for r in rows if r["kind"] == "exchange")


def test_format_rows_flags_nothing_for_fixtures():
    lines = format_rows(run_matrix(create_codec("json")))
    assert len(lines) == 9
    assert not any("differs from prediction" in line for line in lines)
    assert any(line.startswith("Greeting ") and "-name" in line for line in lines)


def test_main_prints_table(capsys):
    assert main(["--codec", "json"]) == 0
    out = capsys.readouterr().out
    assert "client v1 -> server v0" in out
    assert "failed on response" in out
