from __future__ import annotations

import argparse
import json
import os
import sys
from importlib import metadata
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

import tomllib

from .convert import collect_readings, to_base_text, to_reading_text
from .document import scan_document, set_debug_logging
from .model import PlainText, RubyElement, Segment, deserialize_segments, serialize_segments
from .render import render_document

DEBUG_ENV_VAR = "FURI_DEBUG"


def _read_local_version() -> str | None:
    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
    except IndexError:  # pragma: no cover
        return None
    try:
        with pyproject_path.open("rb") as fh:
            data = tomllib.load(fh)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return None
    return data.get("project", {}).get("version")


try:
    __version__ = metadata.version("furi")
except metadata.PackageNotFoundError:
    __version__ = _read_local_version() or "0.0.0+unknown"


def _add_version_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"furi {__version__}",
    )


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "text",
        nargs="*",
        help="Text containing <ruby> markup. Multiple arguments are joined without separators.",
    )
    parser.add_argument(
        "-f",
        "--file",
        help="Read the text from a UTF-8 file instead ('-' for stdin).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help=f"Report where scanning stopped on stderr (or set {DEBUG_ENV_VAR}=1).",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi",
        description=(
            "Parse and render <ruby>KANJI<rt>READING</ruby> furigana markup. "
            "Commands: parse, render, kana, strip, readings."
        ),
    )
    _add_version_flag(ap)
    return ap


def build_parse_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi parse",
        description="List the ruby elements found in the input text.",
    )
    _add_version_flag(ap)
    _add_input_arguments(ap)
    ap.add_argument(
        "--json",
        action="store_true",
        help="Print the elements as a JSON payload (accepted by `furi render`).",
    )
    ap.add_argument(
        "--preserve-unmatched",
        action="store_true",
        help="Keep text outside ruby spans instead of stopping at the first non-match.",
    )
    return ap


def build_render_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi render",
        description="Render a JSON payload from `furi parse --json` back to ruby markup.",
    )
    _add_version_flag(ap)
    ap.add_argument("payload", help="Path to the JSON payload ('-' for stdin).")
    return ap


def build_kana_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi kana",
        description="Replace every annotated base with its reading.",
    )
    _add_version_flag(ap)
    _add_input_arguments(ap)
    ap.add_argument(
        "--katakana",
        action="store_true",
        help="Convert hiragana readings to katakana.",
    )
    return ap


def build_strip_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi strip",
        description="Remove furigana, keeping only the base text.",
    )
    _add_version_flag(ap)
    _add_input_arguments(ap)
    return ap


def build_readings_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="furi readings",
        description="Count the readings given to each annotated base as JSON.",
    )
    _add_version_flag(ap)
    _add_input_arguments(ap)
    return ap


def _read_source(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise SystemExit(f"Input file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise SystemExit(f"Input file is not valid UTF-8: {path} ({exc.reason})") from exc
    except OSError as exc:
        raise SystemExit(f"Cannot read input file {path}: {exc.strerror or exc}") from exc


def _load_text(args: argparse.Namespace) -> str:
    if args.file and args.text:
        raise SystemExit("Pass either text arguments or --file, not both.")
    if args.file:
        text = _read_source(args.file)
    else:
        text = "".join(args.text)
    # Files usually end with a newline, which would otherwise count as plain text.
    text = text.rstrip("\r\n")
    if not text:
        raise SystemExit("No text provided.")
    return text


def _configure_debug(args: argparse.Namespace) -> None:
    env_flag = os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in {"1", "true", "yes", "on"}
    set_debug_logging(bool(getattr(args, "debug", False)) or env_flag)


def _print_segments_table(segments: Sequence[Segment], console: Console) -> None:
    table = Table("#", "Base", "Reading", "Trailing")
    for index, segment in enumerate(segments, start=1):
        if isinstance(segment, RubyElement):
            # Text cells are never parsed as console markup.
            table.add_row(str(index), Text(segment.base), Text(segment.reading), Text(segment.trailing))
        else:
            table.add_row(str(index), "", "", Text(segment.text), style="dim")
    console.print(table)


def _run_parse(args: argparse.Namespace) -> int:
    _configure_debug(args)
    text = _load_text(args)
    segments = scan_document(text, preserve_unmatched=args.preserve_unmatched)
    if args.json:
        print(json.dumps(serialize_segments(segments), ensure_ascii=False, indent=2))
        return 0
    if not segments:
        print("No ruby elements found.", file=sys.stderr)
        return 0
    console = Console()
    if console.is_terminal:
        _print_segments_table(segments, console)
        return 0
    for segment in segments:
        if isinstance(segment, PlainText):
            print(f"-\t-\t{segment.text}")
        else:
            print(f"{segment.base}\t{segment.reading}\t{segment.trailing}")
    return 0


def _run_render(args: argparse.Namespace) -> int:
    raw = _read_source(args.payload)
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON payload: {exc}") from exc
    if not isinstance(payload, list):
        raise SystemExit("JSON payload must be a list of elements.")
    try:
        segments = deserialize_segments(payload)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc
    print(render_document(segments))
    return 0


def _run_kana(args: argparse.Namespace) -> int:
    _configure_debug(args)
    segments = scan_document(_load_text(args), preserve_unmatched=True)
    print(to_reading_text(segments, katakana=args.katakana))
    return 0


def _run_strip(args: argparse.Namespace) -> int:
    _configure_debug(args)
    segments = scan_document(_load_text(args), preserve_unmatched=True)
    print(to_base_text(segments))
    return 0


def _run_readings(args: argparse.Namespace) -> int:
    _configure_debug(args)
    segments = scan_document(_load_text(args), preserve_unmatched=True)
    readings = collect_readings(segments)
    payload = {base: dict(counts.most_common()) for base, counts in readings.items()}
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


_COMMANDS = {
    "parse": (build_parse_parser, _run_parse),
    "render": (build_render_parser, _run_render),
    "kana": (build_kana_parser, _run_kana),
    "strip": (build_strip_parser, _run_strip),
    "readings": (build_readings_parser, _run_readings),
}


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if argv and argv[0] in _COMMANDS:
        build_command_parser, run_command = _COMMANDS[argv[0]]
        command_args = build_command_parser().parse_args(argv[1:])
        return run_command(command_args)

    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0
    parser.parse_args(argv)
    parser.error(f"unknown command: {argv[0]}")


if __name__ == "__main__":
    raise SystemExit(main())
