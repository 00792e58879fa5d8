"""Command line interface for wmbkit."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .api import inspect_directory, load_level, summarize_level, texture_rows
from .config import CoordinateSystem, DecodeOptions, load_options
from .format.errors import WmbError
from .logging import configure_logging, section, step
from .reporting import (
    PlainReporter,
    RichReporter,
    SilentReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
    task,
)


def _options(args: argparse.Namespace) -> DecodeOptions:
    opts = load_options(args.config) if args.config else DecodeOptions()
    if args.coords is not None:
        opts = replace(opts, coordinate_system=CoordinateSystem.parse(args.coords))
    if args.no_warnings:
        opts = replace(opts, log_warnings=False)
    if args.verbose >= 1:
        opts = replace(opts, log_verbose=True)
    # failures are reported once, by main()
    return replace(opts, log_errors=False)


def _load(args: argparse.Namespace):
    opts = _options(args)
    step(f"loading {args.level.name} ({opts.coordinate_system.name.lower()})")
    with task("decode", f"Decode {args.level.name}", total=1):
        level = load_level(args.level, opts)
        get_reporter().advance(
            "decode",
            current_item=args.level.name,
            textures=len(level.textures),
            materials=len(level.materials),
            blocks=len(level.blocks),
            objects=len(level.objects),
            lightmaps=len(level.lightmaps),
            bytes=args.level.stat().st_size,
        )
    return level


def _textures_cmd(args: argparse.Namespace) -> int:
    level = _load(args)
    get_reporter().flush()
    for row in texture_rows(level):
        print(row)
    return 0


def _info_cmd(args: argparse.Namespace) -> int:
    level = _load(args)
    summary = summarize_level(level)
    rep = get_reporter()
    rep.flush()
    if args.json:
        print(json.dumps(summary, indent=2, sort_keys=True))
        return 0
    with section("Level summary"):
        info = summary["info"]
        rep.status(
            f"Info: lightmap_size={info['lightmap_size']} azimuth={info['azimuth']:g} "
            f"elevation={info['elevation']:g} gamma={info['gamma']:g}"
        )
        rep.status(
            "Geometry: "
            + f"blocks={summary['blocks']} vertices={summary['vertices']} triangles={summary['triangles']}"
        )
        rep.status(
            "Resources: "
            + f"textures={summary['textures']} materials={summary['materials']} "
            + f"lightmaps={summary['lightmaps']} terrain_lightmaps={summary['terrain_lightmaps']}"
        )
        rep.status(f"Warnings: {summary['warnings']}")
        rep.status(
            "Objects: "
            + " ".join(f"{k}={v}" for k, v in summary["objects"].items())
        )
    return 0


def _sections_cmd(args: argparse.Namespace) -> int:
    print(json.dumps(inspect_directory(args.level), indent=2, sort_keys=True))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="wmbkit", description="WMB7 level inspection tool")
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, silent",
    )
    p.add_argument(
        "--coords",
        choices=[c.name.lower() for c in CoordinateSystem],
        default=None,
        help="Target coordinate system (default: gamestudio)",
    )
    p.add_argument(
        "--config",
        type=Path,
        help="JSON or YAML file with decode options",
    )
    p.add_argument(
        "--no-warnings",
        dest="no_warnings",
        action="store_true",
        help="Do not report recoverable decode problems",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    t = sub.add_parser("textures", help="List the textures of a level")
    t.add_argument("level", type=Path)
    t.set_defaults(func=_textures_cmd)

    i = sub.add_parser("info", help="Summarize a level")
    i.add_argument("level", type=Path)
    i.add_argument("--json", action="store_true", help="Emit JSON summary")
    i.set_defaults(func=_info_cmd)

    s = sub.add_parser("sections", help="Dump the section directory as JSON")
    s.add_argument("level", type=Path)
    s.set_defaults(func=_sections_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    requested = args.reporter
    # rich needs a terminal; fall back to plain quietly
    use_rich = requested == "rich" and sys.stderr.isatty()
    if requested == "silent":
        set_reporter(SilentReporter())
    elif use_rich:
        set_reporter(RichReporter())
    else:
        set_reporter(PlainReporter())
    set_verbosity(args.verbose)
    configure_logging(args.verbose, use_rich=use_rich)
    try:
        return args.func(args)
    except WmbError as exc:
        get_reporter().error(str(exc))
        return 1
    except FileNotFoundError as exc:
        get_reporter().error(f"File not found: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
