"""Convert saved credit-assistant output into structured JSON and/or PDF reports.

Each input file holds one assistant response (markdown template or JSON
report).  Outputs are written as <stem>.json / <stem>.pdf, next to the input
or into --out-dir.

Usage:
    creditbanc report.md                          # report.json + report.pdf
    creditbanc reports/*.md --format json --out-dir out/
    python -m creditbanc.cli report.md --title "Jane Doe Credit Report"
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from creditbanc.config import DEFAULT_TITLE, LOG_FORMAT, LOG_LEVEL, header_logo_path
from creditbanc.pdf.render import render_report_pdf
from creditbanc.report.payload import parse_assistant_output

logger = logging.getLogger(__name__)

FORMATS = ("json", "pdf", "both")


def convert_file(path: Path, out_dir: Path | None, fmt: str, title: str) -> list[Path]:
    """Parse one input file and write the requested outputs; return the written paths."""
    text = path.read_text(encoding="utf-8")
    report = parse_assistant_output(text)
    if report.missing_sections:
        logger.warning("%s: missing %s", path.name, ", ".join(report.missing_sections))

    target_dir = out_dir or path.parent
    target_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if fmt in ("json", "both"):
        json_path = target_dir / f"{path.stem}.json"
        json_path.write_text(json.dumps(report.to_json_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        written.append(json_path)

    if fmt in ("pdf", "both"):
        pdf_path = target_dir / f"{path.stem}.pdf"
        pdf_path.write_bytes(render_report_pdf(report, header_image=header_logo_path(), title=title))
        written.append(pdf_path)

    return written


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and convert every input file."""
    parser = argparse.ArgumentParser(description="Convert credit-assistant output into JSON and/or PDF reports")
    parser.add_argument("inputs", nargs="+", type=Path, help="Assistant output files (markdown or JSON)")
    parser.add_argument("--out-dir", type=Path, default=None, help="Directory for outputs (default: next to each input)")
    parser.add_argument("--format", choices=FORMATS, default="both", help="Which outputs to write (default: both)")
    parser.add_argument("--title", default=DEFAULT_TITLE, help=f"Title printed on the PDF (default: {DEFAULT_TITLE!r})")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger("reportlab").setLevel(logging.WARNING)

    n_written, failures = 0, 0
    for path in tqdm(args.inputs, desc="Converting reports", unit="file", disable=len(args.inputs) < 2):
        try:
            written = convert_file(path, args.out_dir, args.format, args.title)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Could not read %s: %s", path, exc)
            failures += 1
            continue
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Could not convert %s", path)
            failures += 1
            continue
        n_written += len(written)
        logger.debug("%s -> %s", path.name, ", ".join(p.name for p in written))

    logger.info("Converted %d/%d file(s), wrote %d output(s)", len(args.inputs) - failures, len(args.inputs), n_written)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
