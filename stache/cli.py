from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .data import apply_overrides, load_data
from .errors import StacheUserError
from .evaluator import render
from .parser import parse
from .version import tool_version

_LOG = logging.getLogger("stache")


def _setup_logging() -> None:
    if getattr(_setup_logging, "_inited", False):
        return
    _setup_logging._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if os.environ.get("STACHE_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler(sys.stderr)
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stache",
        description="Mustache-style template renderer",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Render a template to stdout")
    sp_render.add_argument("template", help="template file, or - for stdin")
    sp_render.add_argument(
        "--data",
        metavar="FILE|-",
        help="YAML/JSON file with the template environment (- for stdin)",
    )
    sp_render.add_argument(
        "--set",
        dest="overrides",
        action="append",
        metavar="KEY=VALUE",
        help="set an environment value, dotted keys allowed (can be repeated)",
    )
    sp_render.add_argument(
        "--strict",
        action="store_true",
        help="fail on malformed tags and unterminated sections instead of printing them as text",
    )

    sp_check = sub.add_parser("check", help="Report parse diagnostics (JSON)")
    sp_check.add_argument("template", help="template file, or - for stdin")

    return p


def _read_template(arg: str) -> str:
    if arg == "-":
        return sys.stdin.read()
    path = Path(arg)
    if not path.is_file():
        raise StacheUserError(f"Template file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise StacheUserError(f"Failed to read template {path}: {e}")


def main(argv: Optional[list[str]] = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "render":
            if ns.template == "-" and ns.data == "-":
                raise StacheUserError("Template and data cannot both be read from stdin")
            source = _read_template(ns.template)
            env = apply_overrides(load_data(ns.data), ns.overrides)
            template = parse(source, strict=ns.strict)
            for d in template.diagnostics:
                _LOG.warning(f"{d.message} at {d.line}:{d.column}")
            sys.stdout.write(render(template, env))
            return 0

        if ns.cmd == "check":
            template = parse(_read_template(ns.template))
            report = {
                "ok": template.ok,
                "diagnostics": [d.to_dict() for d in template.diagnostics],
            }
            sys.stdout.write(json.dumps(report, ensure_ascii=False))
            return 0 if template.ok else 1

    except StacheUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
