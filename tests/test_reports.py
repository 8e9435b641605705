# tests/test_reports.py
"""
Report and CLI tests.

- Uses tmp_path to isolate report outputs.
- Parses the generated HTML report with BeautifulSoup.
- Runs the CLI in dummy mode against a capture file.
"""

import csv
import json
import os

import pytest
from bs4 import BeautifulSoup

import main
from bounty_targets.hackerone import HackerOneScanner
from utils import load_json_file, program_to_dict, save_report
from conftest import INTROSPECTION, FakeClient, scope_node, team_node, teams_page


def _scanner():
    node_a = team_node("Acme", [
        scope_node("https://b.acme.example"),
        scope_node("https://a.acme.example"),
        scope_node("*.acme.example", asset_type="WILDCARD"),
        scope_node("https://legacy.acme.example", eligible=False),
    ])
    node_b = team_node("Beta", [scope_node("com.beta.app", asset_type="GOOGLE_PLAY_APP_ID")], offers_bounties=False)
    return HackerOneScanner(client=FakeClient([teams_page([node_a, node_b])]))


def test_program_to_dict_nests_targets():
    program = _scanner().scan()[0]
    data = program_to_dict(program)
    assert set(data) == {"name", "url", "offers_bounties", "offers_swag", "targets"}
    assert [s["asset_identifier"] for s in data["targets"]["in_scope"]] == [
        "*.acme.example", "https://a.acme.example", "https://b.acme.example"]
    assert data["targets"]["out_of_scope"][0]["asset_identifier"] == "https://legacy.acme.example"
    assert len(data["targets"]["in_scope"][0]) == 9


def test_save_report_writes_all_formats(tmp_path):
    scanner = _scanner()
    paths = save_report(scanner.scan(), scanner.uris(), mode="dummy", extra={"source": "test"}, out_dir=str(tmp_path))
    for key in ("json", "csv", "html", "uris"):
        assert os.path.exists(paths[key])

    with open(paths["json"], "r", encoding="utf-8") as fh:
        report = json.load(fh)
    assert report["mode"] == "dummy"
    assert report["summary"]["programs_count"] == 2
    assert report["summary"]["in_scope_count"] == 4
    assert report["summary"]["out_of_scope_count"] == 1
    assert report["summary"]["uris_count"] == 2
    assert report["extra"] == {"source": "test"}
    assert [p["name"] for p in report["programs"]] == ["Acme", "Beta"]

    with open(paths["csv"], "r", encoding="utf-8", newline="") as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 5
    assert rows[-2]["bucket"] == "out_of_scope"

    with open(paths["uris"], "r", encoding="utf-8") as fh:
        assert fh.read().splitlines() == ["https://a.acme.example", "https://b.acme.example"]


def test_html_report_lists_every_scope(tmp_path):
    scanner = _scanner()
    paths = save_report(scanner.scan(), scanner.uris(), mode="dummy", out_dir=str(tmp_path))
    with open(paths["html"], "r", encoding="utf-8") as fh:
        soup = BeautifulSoup(fh, "html.parser")

    assert "mode: dummy" in soup.find("h2").get_text(strip=True)
    rows = soup.find("table").find_all("tr")
    assert len(rows) == 6
    found = False
    for tr in rows[1:]:
        cols = [td.get_text(strip=True) for td in tr.find_all("td")]
        if cols[2] == "https://legacy.acme.example":
            assert cols[0] == "Acme"
            assert cols[1] == "out_of_scope"
            found = True
    assert found


def test_load_json_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_json_file(str(tmp_path / "missing.json"))
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="line 1"):
        load_json_file(str(broken))


def test_cli_dummy_mode(tmp_path, capsys):
    capture = {
        "schema": INTROSPECTION,
        "pages": [
            teams_page([team_node("Acme", [scope_node("https://acme.example")])], end_cursor="c1", has_next_page=True),
            teams_page([team_node("Beta")]),
        ],
    }
    capture_path = tmp_path / "capture.json"
    capture_path.write_text(json.dumps(capture), encoding="utf-8")
    report_dir = tmp_path / "reports"

    main.main(["--mode", "dummy", "--file", str(capture_path), "--report-dir", str(report_dir)])

    out = capsys.readouterr().out
    assert "Total programs: 2" in out
    written = sorted(os.listdir(report_dir))
    assert len(written) == 4
    uris_file = [name for name in written if name.endswith("-uris.txt")][0]
    assert (report_dir / uris_file).read_text(encoding="utf-8") == "https://acme.example\n"


def test_cli_dummy_mode_requires_file():
    with pytest.raises(SystemExit):
        main.main(["--mode", "dummy"])


def test_cli_live_endpoint_from_env(monkeypatch, tmp_path):
    seen = {}

    class StubClient(FakeClient):
        def __init__(self, endpoint):
            seen["endpoint"] = endpoint
            super().__init__([teams_page([team_node("Acme")])])

    monkeypatch.setenv("HACKERONE_GRAPHQL_URL", "https://mirror.example/graphql")
    monkeypatch.setattr(main, "GraphQLClient", StubClient)
    main.main(["--mode", "live", "--report-dir", str(tmp_path)])
    assert seen["endpoint"] == "https://mirror.example/graphql"
