"""
test_main.py - CLI checks.

Usage: pytest test_main.py   (or: python test_main.py)
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from main import load_receipt, main, score_file

BASE_DIR = Path(__file__).resolve().parent
RECEIPTS_DIR = BASE_DIR / "test_data" / "receipts"


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # main() reconfigures the root logger; undo it between tests.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_load_receipt_reads_sample_file() -> None:
    receipt = load_receipt(str(RECEIPTS_DIR / "target.json"))
    assert receipt.retailer == "Target"
    assert len(receipt.items) == 5


def test_score_file_samples() -> None:
    _, target = score_file(str(RECEIPTS_DIR / "target.json"))
    _, corner = score_file(str(RECEIPTS_DIR / "corner_market.json"))
    assert sum(result.points for result in target) == 28
    assert sum(result.points for result in corner) == 112


def test_load_receipt_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_receipt(str(tmp_path / "nope.json"))


def test_load_receipt_bad_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{oops", encoding="utf-8")
    with pytest.raises(ValueError):
        load_receipt(str(path))


def test_main_json_output(capsys: pytest.CaptureFixture[str]) -> None:
    main([str(RECEIPTS_DIR / "target.json"), "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert payload["points"] == 28
    assert [rule["rule"] for rule in payload["rules"]][0] == "retailer_name"


def test_main_text_output(capsys: pytest.CaptureFixture[str]) -> None:
    main([str(RECEIPTS_DIR / "corner_market.json")])
    out = capsys.readouterr().out
    assert "M&M Corner Market" in out
    assert "TOTAL" in out
    assert "112" in out


def test_main_invalid_receipt_exits_1(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    data = json.loads((RECEIPTS_DIR / "target.json").read_text(encoding="utf-8"))
    data["items"] = []
    path = tmp_path / "empty.json"
    path.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(SystemExit) as info:
        main([str(path)])
    assert info.value.code == 1
    assert "items" in capsys.readouterr().err


def test_main_malformed_receipt_exits_1(tmp_path: Path) -> None:
    path = tmp_path / "shape.json"
    path.write_text(json.dumps({"retailer": "Target"}), encoding="utf-8")
    with pytest.raises(SystemExit) as info:
        main([str(path)])
    assert info.value.code == 1


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
