# qperformance/main.py
from __future__ import annotations
from pathlib import Path
import logging
import sys
import yaml

from qperformance.core.errors import QPerfError
from qperformance.core.pipeline import qperf
from qperformance.core.reports import write_report
from qperformance.loaders.log_loader import LogLayout


def load_config(cfg_path: Path) -> dict:
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    # ---------- config ----------
    here = Path(__file__).resolve().parent
    cfg_path = Path(argv[0]) if argv else here / "config.yaml"
    cfg = load_config(cfg_path)

    inp = cfg.get("input", {}) or {}
    rep = cfg.get("report", {}) or {}
    out_path = str((cfg.get("output", {}) or {}).get("path") or "").strip()

    verbose = bool(cfg.get("logging", {}).get("verbose", True))
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    if verbose:
        print(f"[cfg] {cfg_path}")
        print(f"[cfg] question_sets={inp.get('question_sets')} logs={inp.get('logs')}")
        print(f"[cfg] output={out_path or '<stdout>'}")

    # ---------- run ----------
    try:
        warns, report = qperf(
            inp.get("question_sets") or [],
            inp.get("logs") or [],
            verbose=verbose,
            types=rep.get("types"),
            delimiter=str(rep.get("delimiter", ",")),
            tournament=str(rep.get("tournament") or ""),
            display_individual_rounds=bool(rep.get("display_individual_rounds", False)),
            layout=LogLayout.from_config(cfg),
            recurse=bool(inp.get("recurse", False)),
        )
    except QPerfError as e:
        print(f"[ERROR] {e}")
        return 1

    for w in warns:
        print(f"[WARN] {w}")

    # ---------- save ----------
    if not out_path:
        print(report, end="")
        return 0
    try:
        write_report(report, Path(out_path))
    except FileExistsError as e:
        print(f"[ERROR] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
