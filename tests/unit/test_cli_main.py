from __future__ import annotations

import json
from pathlib import Path

from household_directory.cli import main as cli_main
from household_directory.logging.init import reset_logging


def _seed_store(temp_workdir: Path, rows: list[dict[str, str]]) -> None:
    (temp_workdir / "data" / "directory.json").write_text(json.dumps(rows), encoding="utf-8")


def test_cli_search_highlights_matches(write_config, temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    _seed_store(temp_workdir, sample_rows)

    code = cli_main(["search", "Joseph"])

    out = capsys.readouterr().out
    assert code == 0
    lines = out.strip().splitlines()
    assert lines == [
        "[Joseph] Mathew | Puthenpurayil | Mary [Joseph], Anna [Joseph]",
        "Mary [Joseph] | Puthenpurayil | [Joseph] Mathew",
    ]


def test_cli_search_no_results(write_config, temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    _seed_store(temp_workdir, sample_rows)

    code = cli_main(["search", "nobody-here"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "No results found"


def test_cli_search_blank_query_prints_nothing(write_config, temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    _seed_store(temp_workdir, sample_rows)

    code = cli_main(["search", "   "])

    assert code == 0
    assert capsys.readouterr().out == ""


def test_cli_search_without_data(write_config, temp_workdir: Path, capsys):
    reset_logging()

    code = cli_main(["search", "x"])

    assert code == 2
    assert "ERROR no directory loaded" in capsys.readouterr().out


def test_cli_corrupted_store_falls_back(write_config, temp_workdir: Path, capsys):
    reset_logging()
    store = temp_workdir / "data" / "directory.json"
    store.write_text("{broken", encoding="utf-8")

    code = cli_main(["search", "x"])

    out = capsys.readouterr().out
    assert code == 2
    assert "WARN persisted directory is corrupted" in out
    assert not store.exists()


def test_cli_show_prints_details(write_config, temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    _seed_store(temp_workdir, sample_rows)

    code = cli_main(["show", "thomas"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Thomas Varghese" in out
    assert "Family / House Name: Kizhakkethil" in out
    assert "No family listed" in out
    assert "Contact Number: 9123456780" in out
    assert "Address: Not Available" in out
    assert "Google Maps Link: No Link" in out


def test_cli_show_relations(write_config, temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    _seed_store(temp_workdir, sample_rows)

    cli_main(["show", "joseph mathew"])

    out = capsys.readouterr().out
    assert "Wife: Mary Joseph" in out
    assert "Daughter: Anna Joseph" in out
    assert "Google Maps Link: https://maps.example/abc" in out


def test_cli_import_unreadable_file(write_config, temp_workdir: Path, capsys):
    reset_logging()
    bad = temp_workdir / "data" / "bad.xlsx"
    bad.write_bytes(b"not a workbook")

    code = cli_main(["import", str(bad)])

    assert code == 1
    assert "ERROR import:" in capsys.readouterr().out


def test_cli_custom_config_path(temp_workdir: Path, sample_rows, capsys):
    reset_logging()
    cfg = temp_workdir / "alt.yml"
    cfg.write_text('store_path: ./data/alt.json\nhighlight:\n  open: "<<"\n  close: ">>"\n', encoding="utf-8")
    (temp_workdir / "data" / "alt.json").write_text(json.dumps(sample_rows), encoding="utf-8")

    code = cli_main(["--config", str(cfg), "search", "anna"])

    assert code == 0
    assert "Mary Joseph, <<Anna>> Joseph" in capsys.readouterr().out


def test_cli_import_unwritable_store(temp_workdir: Path, make_excel, capsys):
    reset_logging()
    # store_path sits under a regular file, so its directory cannot be created
    (temp_workdir / "data" / "blocker").write_text("", encoding="utf-8")
    cfg = temp_workdir / "blocked.yml"
    cfg.write_text("store_path: ./data/blocker/directory.json\n", encoding="utf-8")
    book = make_excel(temp_workdir / "members.xlsx", [["Name", "Family Name"], ["Ann", "Smith"]])

    code = cli_main(["--config", str(cfg), "import", str(book)])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR import: cannot save rows" in out
    assert "SUMMARY" not in out
