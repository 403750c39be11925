# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("HOUSEHOLD_DIRECTORY_STORE", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """store_path: ./data/directory.json
timezone: UTC
highlight:
  open: "["
  close: "]"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "directory.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_rows() -> list[dict[str, str]]:
    """Three households; house name given only on each household's first row."""
    return [
        {
            "familynamehousename": "Puthenpurayil",
            "name": "Joseph Mathew",
            "othermembersinfamily": "Mary Joseph, Anna Joseph",
            "relation": "Wife, Daughter",
            "dob": "25/12",
            "anniversary": "4/5/1998",
            "contactnumber": "9876543210",
            "map": "Near St. Mary's Church, Kottayam / https://maps.example/abc",
        },
        {
            "familynamehousename": "",
            "name": "Mary Joseph",
            "othermembersinfamily": "Joseph Mathew",
            "relation": "Husband",
            "dob": "NA",
            "anniversary": "4/5",
            "contactnumber": "",
            "map": "",
        },
        {
            "familynamehousename": "Kizhakkethil",
            "name": "Thomas Varghese",
            "othermembersinfamily": "",
            "relation": "",
            "dob": "1/1",
            "anniversary": "-",
            "contactnumber": "9123456780",
            "map": "-",
        },
        {
            "familynamehousename": "",
            "name": "",
            "othermembersinfamily": "",
            "relation": "",
            "dob": "",
            "anniversary": "",
            "contactnumber": "",
            "map": "Pala town",
        },
    ]


@pytest.fixture()
def make_excel():
    """Write rows (first row = header) to an .xlsx file via pandas/openpyxl."""
    def _make(path: Path, rows: list[list[object]], sheet_name: str = "Sheet1") -> Path:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        return path
    return _make
