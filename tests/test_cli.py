import json
from pathlib import Path

from inventory.cli import main


def _write_seed(tmp_path: Path) -> Path:
    seed = tmp_path / "seed.yaml"
    seed.write_text(
        """
version: 1
tables:
  Models:
    - Model Name: X
  Office Locations:
    - Office Name: A
    - Office Name: B
  Asset Types:
    - Type: Laptop
  Asset Status:
    - Status Type: Stock
    - Status Type: Deployed
  Assets:
    - Model: X
      Office Location: A
      Asset Type: Laptop
      Status: Stock
      Quantity: 2
    - Model: X
      Office Location: B
      Asset Type: Laptop
      Status: Deployed
""",
        encoding="utf-8",
    )
    return seed


def _seeded(tmp_path: Path) -> list[str]:
    base = ["--config", str(tmp_path / "absent.yaml"), "--store", str(tmp_path / "store.json")]
    assert main([*base, "seed", "--file", str(_write_seed(tmp_path))]) == 0
    return base


def test_summary_json_in_filter_mode(tmp_path: Path, capsys) -> None:
    base = _seeded(tmp_path)
    capsys.readouterr()

    assert main([*base, "summary", "--model", "X", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["headline"] == {"label": "X (Model)", "count": 2}
    assert payload["byModel"] == [{"name": "X", "count": 3, "Stock": 2, "Deployed": 1}]
    assert payload["filteredQuantity"] == [{"name": "X", "count": 2, "Stock": 2}]


def test_summary_selection_mode(tmp_path: Path, capsys) -> None:
    base = _seeded(tmp_path)
    capsys.readouterr()

    assert main([*base, "summary", "--select", "2", "--location", "A", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)

    assert payload["headline"] == {"label": "Selected Asset", "count": 1}
    assert payload["selectedModels"] == [{"name": "X", "count": 1, "Deployed": 1}]
    assert payload["byLocationAndType"] == []


def test_summary_text_output(tmp_path: Path, capsys) -> None:
    base = _seeded(tmp_path)
    capsys.readouterr()

    assert main([*base, "summary"]) == 0
    out = capsys.readouterr().out

    assert out.startswith("Total Assets: 2")
    assert "A: 2 [Stock=2]" in out


def test_search_and_validate(tmp_path: Path, capsys) -> None:
    base = _seeded(tmp_path)
    capsys.readouterr()

    assert main([*base, "search", "--field", "location", "--query", "b"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("2\tX\tB")

    assert main([*base, "validate"]) == 0
    assert capsys.readouterr().out == ""


def test_errors_return_non_zero(tmp_path: Path, capsys) -> None:
    store = tmp_path / "store.json"
    store.write_text("[]", encoding="utf-8")

    assert main(["--config", str(tmp_path / "absent.yaml"), "--store", str(store), "summary"]) == 1
    assert "error:" in capsys.readouterr().out
