"""Liste les modules sous 100% de couverture, les plus faciles à compléter d'abord."""

import json
import subprocess
import sys
from pathlib import Path

COVERAGE_JSON = Path("coverage.json")


def _run_tests() -> bool:
    print("Running tests and generating coverage report...")
    try:
        subprocess.run(
            [sys.executable, "-m", "pytest", "--cov=continuation_boot", "--cov=main", "--cov-report=json"],
            check=False,  # Les échecs de tests n'empêchent pas le rapport
            capture_output=True,
        )
    except OSError as e:
        print(f"Error running tests: {e}")
        return False
    return True


def main():
    if not _run_tests():
        return

    if not COVERAGE_JSON.exists():
        print("coverage.json not found.")
        return

    data = json.loads(COVERAGE_JSON.read_text(encoding="utf-8"))

    gaps = []
    for filename, file_data in data["files"].items():
        if filename.startswith("tests/"):
            continue
        summary = file_data["summary"]
        if summary["percent_covered"] < 100:
            gaps.append((filename, summary["percent_covered"], summary["missing_lines"]))

    gaps.sort(key=lambda gap: gap[2])

    print(f"\n{'File':<60} | {'Coverage':<10} | {'Missing Lines':<10}")
    print("-" * 85)
    for name, percent, missing in gaps:
        print(f"{name:<60} | {percent:>9.2f}% | {missing:>10}")
    if not gaps:
        print("All modules fully covered.")


if __name__ == "__main__":
    main()
