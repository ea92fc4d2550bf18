"""Run full scenario validation and store a markdown report.

Usage:
    python -m scripts.run_validation --out artifacts/validation_report.md
"""

from __future__ import annotations

import argparse
import logging
import shutil
from pathlib import Path

from bounce_core.logging_config import setup_logging
from scenarios.runner import run_all


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run scenario sweep validation report.")
    parser.add_argument("--out", default="artifacts/validation_report.md", help="Output markdown report path")
    parser.add_argument("--h5", default="artifacts/bounce_sweep.h5", help="HDF5 export of all sweep paths")
    parser.add_argument("--plots", default="artifacts/plots", help="Plot output directory")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None, help="Optional log file")
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level), args.log_file)
    generated = Path(run_all(out_h5=args.h5, out_plot_dir=args.plots))
    out_path = Path(args.out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    if generated.resolve() != out_path.resolve():
        shutil.copyfile(generated, out_path)
    print(out_path)


if __name__ == "__main__":
    main()
