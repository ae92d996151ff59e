"""Command-line interface for build-time generation.

Subcommands:
    check     Parse and validate a definition file
    generate  Render the accessors as a Python module
    catalog   Export one variant as a gettext PO catalog (requires Babel)

The target enum is given either as an import path (``--enum pkg.mod:Cls``,
resolved from the current directory as well as sys.path)
or as a plain variant list (``--variants English,Spanish``); with a variant
list the enum name is taken from the definition header.

Usage:
    python -m language_atlas check strings.atlas --enum app.lang:Language
    python -m language_atlas generate strings.atlas --variants English,Spanish -o lang.py
    python -m language_atlas catalog strings.atlas --enum app.lang:Language \\
        --variant Spanish --locale es -o es.po

Exit Codes:
    0   Success
    1   Definition error (syntax, model, or binding conflict)
    2   Usage or I/O error (unreadable file, enum not importable)

Python 3.13+.
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from language_atlas.catalog import export_catalog, write_catalog
from language_atlas.codegen import render_module
from language_atlas.config import GeneratorConfig
from language_atlas.core.babel_compat import BabelImportError, require_babel
from language_atlas.diagnostics import (
    AtlasError,
    AtlasSyntaxError,
    DiagnosticFormatter,
    OutputFormat,
)
from language_atlas.model import AtlasModel, EnumSpec, build_model
from language_atlas.syntax import parse

__all__ = ["main"]

logger = logging.getLogger("language_atlas")


class UsageError(Exception):
    """Bad command-line input detected after argument parsing (exit code 2)."""


def _load_enum(path: str) -> type[Enum]:
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        msg = f"--enum expects 'module:ClassName', got {path!r}"
        raise UsageError(msg)
    # The console script, unlike ``python -m``, does not put the working
    # directory on sys.path.
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        msg = f"Cannot import {module_name}: {e}"
        raise UsageError(msg) from e
    enum_cls = getattr(module, attr, None)
    if not (isinstance(enum_cls, type) and issubclass(enum_cls, Enum)):
        msg = f"{path} is not an Enum class"
        raise UsageError(msg)
    return enum_cls


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise UsageError(msg) from e
    except UnicodeDecodeError as e:
        msg = f"{path} is not valid UTF-8: {e}"
        raise UsageError(msg) from e


def _load_model(args: argparse.Namespace, config: GeneratorConfig) -> AtlasModel:
    document = parse(_read_source(args.file), max_source_size=config.max_source_size)
    if args.enum is not None:
        return build_model(document, _load_enum(args.enum))
    variants = tuple(v.strip() for v in args.variants.split(",") if v.strip())
    try:
        spec = EnumSpec(document.enum_name.name, variants)
    except ValueError as e:
        raise UsageError(str(e)) from e
    return build_model(document, spec)


def _write_text(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write {output}: {e}"
        raise UsageError(msg) from e


def _cmd_check(args: argparse.Namespace, config: GeneratorConfig) -> int:
    model = _load_model(args, config)
    stubs = [spec.name for spec in model if spec.kind.is_stub]
    print(f"[OK] {args.file}: {len(model)} fields for {model.enum.name}")
    for name in stubs:
        print(f"[WARN] Field '{name}' has no language strings")
    return 0


def _cmd_generate(args: argparse.Namespace, config: GeneratorConfig) -> int:
    model = _load_model(args, config)
    _write_text(render_module(model, config), args.output)
    if args.output is not None:
        print(f"[OK] Wrote {len(model)} accessors to {args.output}")
    return 0


def _cmd_catalog(args: argparse.Namespace, config: GeneratorConfig) -> int:
    require_babel("catalog")
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    model = _load_model(args, config)
    try:
        catalog = export_catalog(model, args.variant, locale=args.locale)
    except (UnknownLocaleError, ValueError) as e:
        msg = f"Invalid locale {args.locale!r}: {e}"
        raise UsageError(msg) from e
    if args.output is None:
        write_catalog(catalog, sys.stdout.buffer)
        return 0
    try:
        write_catalog(catalog, args.output)
    except OSError as e:
        msg = f"Cannot write {args.output}: {e}"
        raise UsageError(msg) from e
    print(f"[OK] Wrote {len(catalog)} messages to {args.output}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="language-atlas",
        description="Generate per-variant language accessors for a Python enum.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.RUST.value,
        help="Diagnostic output format (default: rust)",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("file", type=Path, help="Definition file")
    target = common.add_mutually_exclusive_group(required=True)
    target.add_argument("--enum", help="Target enum as module:ClassName")
    target.add_argument("--variants", help="Comma-separated variant names")
    common.add_argument(
        "--stub-sentinel",
        default=None,
        help="Value returned by fields without language strings (default: ToDo!)",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("check", parents=[common], help="Validate a definition file")

    generate = commands.add_parser(
        "generate", parents=[common], help="Render accessors as a Python module"
    )
    generate.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")
    generate.add_argument(
        "--no-stub-warning",
        action="store_true",
        help="Do not emit DeprecationWarning from stub accessors",
    )

    catalog = commands.add_parser(
        "catalog", parents=[common], help="Export a variant as a PO catalog"
    )
    catalog.add_argument("--variant", required=True, help="Variant to export")
    catalog.add_argument("--locale", help="Catalog locale (e.g. es, pt_BR)")
    catalog.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")
    return parser


_COMMANDS = {
    "check": _cmd_check,
    "generate": _cmd_generate,
    "catalog": _cmd_catalog,
}


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_kwargs: dict[str, object] = {}
    if args.stub_sentinel is not None:
        config_kwargs["stub_sentinel"] = args.stub_sentinel
    if getattr(args, "no_stub_warning", False):
        config_kwargs["warn_on_stub"] = False
    config = GeneratorConfig(**config_kwargs)  # type: ignore[arg-type]

    formatter = DiagnosticFormatter(output_format=OutputFormat(args.format))
    try:
        return _COMMANDS[args.command](args, config)
    except (UsageError, BabelImportError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except AtlasError as e:
        if e.diagnostic is not None:
            print(formatter.format(e.diagnostic), file=sys.stderr)
        else:
            print(f"[ERROR] {e}", file=sys.stderr)
        if isinstance(e, AtlasSyntaxError) and e.source_context:
            print(e.source_context, file=sys.stderr)
        logger.debug("Generation failed", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
