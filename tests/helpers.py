import copy
import json
from pathlib import Path

SAMPLE_PORTFOLIO = Path(__file__).resolve().parent.parent / "sample_portfolio.json"


def write_portfolio(tmp_path: Path, data: dict, filename: str = "portfolio.json") -> Path:
    path = tmp_path / filename
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def clone_portfolio(data: dict) -> dict:
    return copy.deepcopy(data)
