# utils.py
"""
Utility helpers: JSON loading, report generation, and console output.

- Uses Rich for colorful, wrapped tables in the terminal.
- Saves JSON, CSV, HTML and plain-text URI reports.
"""

from dataclasses import asdict
from datetime import datetime, timezone
from html import escape
from typing import Any, Dict, List
import json
import csv
import os
from json import JSONDecodeError

from rich.console import Console
from rich.table import Table
from rich.text import Text

from models import Program

_console = Console()

def load_json_file(path: str) -> dict:
    """
    Load JSON from a file and return a Python dict.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Input JSON file not found: {path}.")
    try:
        with open(path, "r", encoding="utf-8-sig") as fh:
            return json.load(fh)
    except JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno} column {e.colno})") from e

def ensure_reports_dir(path: str = "reports") -> str:
    os.makedirs(path, exist_ok=True)
    return path

def program_to_dict(program: Program) -> Dict[str, Any]:
    """
    Serialize a Program with its scopes nested under "targets".
    """
    return {
        "name": program.name,
        "url": program.url,
        "offers_bounties": program.offers_bounties,
        "offers_swag": program.offers_swag,
        "targets": {
            "in_scope": [asdict(s) for s in program.in_scope],
            "out_of_scope": [asdict(s) for s in program.out_of_scope],
        },
    }

def scope_rows(programs: List[Program]) -> List[Dict[str, Any]]:
    """
    Flatten programs into one row per scope, in-scope rows first within each program.
    """
    rows: List[Dict[str, Any]] = []
    for p in programs:
        for bucket, scopes in (("in_scope", p.in_scope), ("out_of_scope", p.out_of_scope)):
            for s in scopes:
                rows.append({
                    "program": p.name,
                    "url": p.url,
                    "bucket": bucket,
                    "asset_identifier": s.asset_identifier,
                    "asset_type": s.asset_type,
                    "eligible_for_bounty": s.eligible_for_bounty,
                    "max_severity": s.max_severity,
                })
    return rows

def summarize(programs: List[Program], uris: List[str]) -> Dict[str, int]:
    return {
        "programs_count": len(programs),
        "bounty_programs_count": sum(1 for p in programs if p.offers_bounties),
        "in_scope_count": sum(len(p.in_scope) for p in programs),
        "out_of_scope_count": sum(len(p.out_of_scope) for p in programs),
        "uris_count": len(uris),
    }

def save_report(programs: List[Program], uris: List[str], mode: str,
                extra: dict = None, out_dir: str = "reports") -> Dict[str, str]:
    """
    Save JSON, CSV, HTML and URI-list reports and return their paths.
    """
    out_dir = ensure_reports_dir(out_dir)
    now = datetime.now(timezone.utc).replace(microsecond=0, tzinfo=None).isoformat() + "Z"
    report = {
        "scan_time": now,
        "mode": mode,
        "summary": summarize(programs, uris),
        "programs": [program_to_dict(p) for p in programs],
    }
    if extra:
        report["extra"] = extra

    base_ts = now.replace(":", "-")
    json_path = os.path.join(out_dir, f"scan-{base_ts}-{mode}.json")
    csv_path = os.path.join(out_dir, f"scan-{base_ts}-{mode}.csv")
    html_path = os.path.join(out_dir, f"scan-{base_ts}-{mode}.html")
    uris_path = os.path.join(out_dir, f"scan-{base_ts}-{mode}-uris.txt")

    # JSON
    with open(json_path, "w", encoding="utf-8") as fh:
        json.dump(report, fh, indent=2)

    # CSV
    rows = scope_rows(programs)
    fieldnames = ["program", "url", "bucket", "asset_identifier", "asset_type",
                  "eligible_for_bounty", "max_severity"]
    with open(csv_path, "w", encoding="utf-8", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

    # URIs
    with open(uris_path, "w", encoding="utf-8") as fh:
        fh.write("".join(f"{u}\n" for u in uris))

    # HTML
    summary = report["summary"]
    html_rows: List[str] = []
    html_rows.append("<!doctype html>")
    html_rows.append("<html><head><meta charset='utf-8'><title>Scope Report</title>")
    html_rows.append("<style>body{font-family:Arial,Helvetica,sans-serif;margin:20px}table{border-collapse:collapse;width:100%}th,td{border:1px solid #ddd;padding:8px}th{background:#f2f2f2;text-align:left}tr:nth-child(even){background:#fafafa}</style>")
    html_rows.append("</head><body>")
    html_rows.append(f"<h2>Scope Report - {now} - mode: {escape(mode)}</h2>")
    html_rows.append(f"<p>Programs: {summary['programs_count']} | In scope: {summary['in_scope_count']} | "
                     f"Out of scope: {summary['out_of_scope_count']} | URLs: {summary['uris_count']}</p>")
    if extra:
        html_rows.append("<div><strong>Metadata:</strong><ul>")
        for k, v in extra.items():
            html_rows.append(f"<li>{escape(str(k))}: {escape(str(v))}</li>")
        html_rows.append("</ul></div>")
    html_rows.append("<table><thead><tr><th>Program</th><th>Bucket</th><th>Asset</th><th>Type</th><th>Bounty</th><th>Max Severity</th></tr></thead><tbody>")
    for row in rows:
        cells = [row["program"], row["bucket"], row["asset_identifier"], row["asset_type"],
                 row["eligible_for_bounty"], row["max_severity"]]
        html_rows.append("<tr>" + "".join(f"<td>{escape(str(c if c is not None else ''))}</td>" for c in cells) + "</tr>")
    html_rows.append("</tbody></table></body></html>")
    with open(html_path, "w", encoding="utf-8") as fh:
        fh.write("\n".join(html_rows))

    return {"json": json_path, "csv": csv_path, "html": html_path, "uris": uris_path}

# --- Console printing with color/wrapping ---

def _rich_bounty_text(offers_bounties):
    """
    Return a Rich Text object styled by whether the program pays bounties.
    """
    if offers_bounties:
        return Text("yes", style="bold green")
    return Text("no", style="yellow")

def print_summary_and_report_path(programs: List[Program], report_paths: Dict[str, str], show_top: int = 5, print_full_table: bool = False):
    """
    Print a compact summary and a colorful table of programs.
    """
    total = len(programs)
    print("\nScan summary:")
    print(f"- Total programs: {total}")
    print(f"- In-scope assets: {sum(len(p.in_scope) for p in programs)}")
    if total:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Program", style="cyan", overflow="fold")
        table.add_column("URL", style="magenta", overflow="fold")
        table.add_column("Bounty")
        table.add_column("In scope", justify="right")
        table.add_column("Out of scope", justify="right")
        for p in (programs if print_full_table else programs[:show_top]):
            table.add_row(str(p.name or ""), str(p.url or ""), _rich_bounty_text(p.offers_bounties),
                          str(len(p.in_scope)), str(len(p.out_of_scope)))
        _console.print(table)
    print("\nSaved reports:")
    print(f"- JSON: {report_paths.get('json')}")
    print(f"- CSV:  {report_paths.get('csv')}")
    print(f"- HTML: {report_paths.get('html')}")
    print(f"- URIs: {report_paths.get('uris')}\n")
