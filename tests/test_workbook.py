"""Tests for the workbook sampler."""

import json

import pytest
from openpyxl import Workbook

from finplanner.components import workbook


@pytest.fixture
def planning_workbook(tmp_path):
    wb = Workbook()
    ws = wb.active
    ws.title = "Inputs"
    ws.append(["Age", "Savings", "Return"])
    for i in range(11):
        ws.append([30 + i, 1000 * i, 0.07])
    wb.create_sheet("Notes")
    path = tmp_path / "plan.xlsx"
    wb.save(path)
    return path


def test_sample_workbook(planning_workbook):
    sheets = workbook.sample_workbook(planning_workbook)
    assert [s.name for s in sheets] == ["Inputs", "Notes"]

    inputs = sheets[0]
    assert inputs.rows == 12
    assert inputs.columns == 3
    assert len(inputs.sample_data) == 10
    assert inputs.sample_data[0] == ["Age", "Savings", "Return"]
    assert inputs.sample_data[1] == [30, 0, 0.07]

    notes = sheets[1]
    assert (notes.rows, notes.columns) == (1, 1)


def test_sample_rows_limit(planning_workbook):
    sheets = workbook.sample_workbook(planning_workbook, sample_rows=3)
    assert len(sheets[0].sample_data) == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        workbook.sample_workbook(tmp_path / "nope.xlsx")


def test_cli_prints_json(planning_workbook, capsys):
    assert workbook.main([str(planning_workbook), "--rows", "2"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data[0]["name"] == "Inputs"
    assert len(data[0]["sample_data"]) == 2


def test_cli_missing_file(tmp_path):
    assert workbook.main([str(tmp_path / "nope.xlsx")]) == 1
