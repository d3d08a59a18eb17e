#!/usr/bin/env python3
"""
Token Estimator

Estimates token counts and costs for text and files (text, CSV, PDF) from
character statistics, without running a tokenizer. Optionally compares the
estimate with an exact tiktoken count, or measures accuracy on a dataset.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from token_estimate.config import Settings, load_settings
from token_estimate.cost import estimate_cost
from token_estimate.estimator import EstimatorConfig, analyze, score
from token_estimate.evaluate import evaluate_dataset
from token_estimate.presets import PresetRegistry, UnknownPresetError
from token_estimate.stats import discover_files, get_file_stats
from token_estimate.tokens import count_text_tokens, relative_error


def format_number(n: int) -> str:
    """Format number with thousands separator."""
    return f"{n:,}"


def format_cost(c: float) -> str:
    """Format cost as USD."""
    if c == 0:
        return "$0"
    if c < 0.0001:
        return f"${c:.6f}"
    return f"${c:.4f}"


def format_file_size(n: int) -> str:
    """Format file size for display (e.g., 4.9K, 181K, 1.2M)."""
    if n < 1024:
        return f"{n} B"
    if n < 1024 * 1024:
        return f"{n / 1024:.1f}K"
    return f"{n / (1024 * 1024):.1f}M"


def _rel_path(path: Path) -> str:
    """Return path relative to cwd if possible."""
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _reference_count(label: str, text: str, model: str) -> int | None:
    """Exact tiktoken count, or None with a warning if tiktoken is unavailable."""
    try:
        return count_text_tokens(text, model=model)
    except Exception as e:
        print(f"Warning: tiktoken failed for {label}: {e}", file=sys.stderr)
        return None


def run_text(
    label: str,
    text: str,
    config: EstimatorConfig,
    cost_model: str,
    compare_model: str | None = None,
    modality: str = "text",
    file_size_bytes: int | None = None,
    pages: str = "-",
) -> dict:
    """Estimate one text and return a result dict."""
    stats = analyze(text, config)
    tokens = score(stats, config)

    tokens_reference = None
    if compare_model:
        tokens_reference = _reference_count(label, text, compare_model)

    return {
        "file": label,
        "modality": modality,
        "pages": pages,
        "char_count": len(text),
        "file_size_bytes": file_size_bytes,
        "preset": config.name,
        "stats": stats.as_dict(),
        "tokens_estimated": tokens,
        "tokens_reference": tokens_reference,
        "error_pct": (
            relative_error(tokens, tokens_reference) if tokens_reference is not None else None
        ),
        "cost": estimate_cost(tokens, cost_model),
    }


def run_single(
    path: Path,
    config: EstimatorConfig,
    cost_model: str,
    compare_model: str | None = None,
) -> dict | None:
    """Process a single file; None when the file type is unsupported."""
    stats = get_file_stats(path)
    if not stats:
        return None
    return run_text(
        _rel_path(path),
        stats.text,
        config,
        cost_model,
        compare_model=compare_model,
        modality=stats.modality,
        file_size_bytes=stats.file_size_bytes,
        pages=stats.pages_str,
    )


def output_table(results: list[dict], show_stats: bool = False) -> None:
    """Print results as a table."""
    if not results:
        print("No supported files found.")
        return

    compare = any(r["tokens_reference"] is not None for r in results)
    headers = ["File", "Modality", "Chars", "Pages", "Size", "Tokens (est.)"]
    if compare:
        headers += ["Tokens (tiktoken)", "Error"]
    headers.append("Cost")

    rows = []
    for r in results:
        size = r.get("file_size_bytes")
        row = [
            r["file"],
            r["modality"],
            format_number(r["char_count"]),
            r["pages"],
            format_file_size(size) if size is not None else "-",
            format_number(r["tokens_estimated"]),
        ]
        if compare:
            ref = r["tokens_reference"]
            row += [
                format_number(ref) if ref is not None else "-",
                f"{r['error_pct']:.1f}%" if r["error_pct"] is not None else "-",
            ]
        row.append(format_cost(r["cost"]))
        rows.append(row)

    col_widths = [max(len(str(row[i])) for row in [headers] + rows) for i in range(len(headers))]
    col_widths[0] = min(col_widths[0], 42)

    def fmt_row(cells: list, widths: list) -> str:
        return "  ".join(str(c).ljust(w)[:w] for c, w in zip(cells, widths))

    print(fmt_row(headers, col_widths))
    print("-" * (sum(col_widths) + 2 * (len(headers) - 1)))
    for row in rows:
        print(fmt_row(row, col_widths))

    if len(results) > 1:
        total_row = [
            "(total)",
            "",
            format_number(sum(r["char_count"] for r in results)),
            "",
            format_file_size(sum(r.get("file_size_bytes") or 0 for r in results)),
            format_number(sum(r["tokens_estimated"] for r in results)),
        ]
        if compare:
            total_ref = sum(r["tokens_reference"] or 0 for r in results)
            total_row += [format_number(total_ref) if total_ref else "-", ""]
        total_row.append(format_cost(sum(r["cost"] for r in results)))
        print(fmt_row(total_row, col_widths))

    if show_stats:
        for r in results:
            print()
            print(f"{r['file']} ({r['preset']})")
            for category, count in r["stats"].items():
                print(f"  {category:<16}{format_number(count)}")


def output_json(results: list[dict], show_stats: bool = False) -> None:
    """Print results as JSON."""
    out = []
    for r in results:
        entry = {
            "file": r["file"],
            "modality": r["modality"],
            "pages": r["pages"],
            "character_count": r["char_count"],
            "file_size_bytes": r["file_size_bytes"],
            "preset": r["preset"],
            "tokens_estimated": r["tokens_estimated"],
            "tokens_reference": r["tokens_reference"],
            "error_pct": round(r["error_pct"], 3) if r["error_pct"] is not None else None,
            "cost_usd": round(r["cost"], 6),
        }
        if show_stats:
            entry["stats"] = r["stats"]
        out.append(entry)
    print(json.dumps(out, indent=2))


def output_presets(registry: PresetRegistry) -> None:
    for name in registry.names():
        config = registry.get(name)
        print(f"{name:<16}{config.taxonomy.name:<8}{config.description}")


def output_evaluation(report, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report.to_dict(), indent=2))
        return
    failures = report.failures
    print(f"Preset:      {report.preset}")
    print(f"Cases:       {format_number(len(report.cases))}")
    print(f"Mean error:  {report.mean_percent_error:.2f}%")
    print(
        f"Failures:    {len(failures)} "
        f"(error > {report.max_percent:g}% and > {report.max_absolute} tokens)"
    )
    for fc in failures[:10]:
        preview = fc.text if len(fc.text) <= 60 else fc.text[:60] + "..."
        print(
            f"  line {fc.line}: expected={fc.expected}, estimated={fc.estimated}, "
            f"error={fc.percent_error:.2f}%, text={preview!r}"
        )
    if len(failures) > 10:
        print(f"  ... and {len(failures) - 10} more failures")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate token counts and costs for text, CSV, and PDF files without tokenizing."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="File(s) or directory(ies) to process; '-' reads text from stdin",
    )
    parser.add_argument(
        "--text",
        help="Estimate this text instead of files",
    )
    parser.add_argument(
        "--preset",
        default=settings.preset,
        help=f"Estimator preset (default: {settings.preset})",
    )
    parser.add_argument(
        "--sample",
        nargs=2,
        type=int,
        metavar=("THRESHOLD", "SIZE"),
        default=(
            (settings.sampling_threshold, settings.sampling_size)
            if settings.sampling_enabled
            else None
        ),
        help="Sample SIZE characters from texts longer than THRESHOLD",
    )
    parser.add_argument(
        "--model",
        default="gpt-4.1",
        help="Model for cost estimation (default: gpt-4.1)",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help=f"Also count tokens exactly with tiktoken ({settings.reference_model})",
    )
    parser.add_argument(
        "--format",
        choices=["table", "json", "both"],
        default="table",
        help="Output format: table, json, or both (default: table)",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show the per-category character breakdown",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List available presets and exit",
    )
    parser.add_argument(
        "--evaluate",
        type=Path,
        metavar="DATASET",
        help='Measure accuracy on a JSONL dataset of {"text", "token_count"} lines',
    )
    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Do not recurse into subdirectories",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    args = build_parser(settings).parse_args(argv)
    registry = PresetRegistry()

    if args.list_presets:
        output_presets(registry)
        return 0

    try:
        config = registry.get(args.preset)
    except UnknownPresetError as e:
        print(f"Error: {e} (available: {', '.join(registry.names())})", file=sys.stderr)
        return 1
    if args.sample:
        config = config.with_sampling(*args.sample)

    if args.evaluate:
        if not args.evaluate.is_file():
            print(f"Error: dataset does not exist: {args.evaluate}", file=sys.stderr)
            return 1
        report = evaluate_dataset(args.evaluate, config)
        if args.format in ("table", "both"):
            output_evaluation(report, as_json=False)
        if args.format in ("json", "both"):
            output_evaluation(report, as_json=True)
        return 0 if report.passed else 2

    compare_model = settings.reference_model if args.compare else None
    results = []

    if args.text is not None:
        results.append(run_text("(text)", args.text, config, args.model, compare_model))
    elif [str(p) for p in args.paths] == ["-"]:
        results.append(run_text("(stdin)", sys.stdin.read(), config, args.model, compare_model))
    else:
        if not args.paths:
            print("Error: give file paths, --text, or '-' for stdin", file=sys.stderr)
            return 1
        paths = [Path(p).resolve() for p in args.paths]
        for p in paths:
            if not p.exists():
                print(f"Error: path does not exist: {p}", file=sys.stderr)
                return 1

        files = discover_files(paths, recursive=not args.no_recursive)
        if not files:
            print("No supported files found.", file=sys.stderr)
            return 1

        for f in files:
            r = run_single(f, config, args.model, compare_model)
            if r:
                results.append(r)

    if args.format == "json":
        output_json(results, args.stats)
    elif args.format == "both":
        output_table(results, args.stats)
        print()
        output_json(results, args.stats)
    else:
        output_table(results, args.stats)

    return 0


if __name__ == "__main__":
    sys.exit(main())
