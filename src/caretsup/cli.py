"""Command-line interface for caretsup."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from caretsup.errors import ConfigError
from caretsup.page import PageOptions

CONFIG_NAME = "caretsup.toml"
DEFAULT_EXTENSIONS = ("superscript",)


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    extensions: tuple[str, ...]
    sup_attributes: list[tuple[str, str]]
    standalone: bool
    page: PageOptions
    watch: bool
    debug: bool
    lint: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="caretsup",
        description="Render Markdown-style text with ^superscript^ spans to HTML",
    )
    p.add_argument("input", help="Input text file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help="Wrap the output in a complete HTML document",
    )
    p.add_argument("--title", help="Page title (with --standalone)")
    p.add_argument("--lang", help="Page language (with --standalone)")
    p.add_argument(
        "--css",
        action="append",
        default=[],
        metavar="FILE",
        help="CSS file to link (repeatable, with --standalone)",
    )
    p.add_argument(
        "--meta",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Meta tag to add (repeatable, with --standalone)",
    )
    p.add_argument(
        "--sup-attr",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Attribute for every <sup> element (repeatable)",
    )
    p.add_argument(
        "--no-superscript",
        action="store_true",
        help="Disable the superscript extension",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and recompile")
    p.add_argument("--debug", action="store_true", help="Dump AST to stderr")
    p.add_argument("--lint", action="store_true", help="Report carets that do not form superscripts")
    return p


def parse_pair_arg(s: str, what: str = "value") -> tuple[str, str]:
    """Parse a NAME=VALUE string into (name, value)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"invalid {what} format (expected NAME=VALUE): {s}")
    name, _, value = s.partition("=")
    if not name:
        raise argparse.ArgumentTypeError(f"invalid {what} format (empty name): {s}")
    return name, value


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        if config_path is not None:
            raise ConfigError("config file not found", path)
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from None


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)
    source_path = config_path or input_dir / CONFIG_NAME

    # Extensions: config < CLI
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    cfg_ext = config.get("extensions")
    if cfg_ext is not None:
        if not isinstance(cfg_ext, list) or not all(isinstance(e, str) for e in cfg_ext):
            raise ConfigError("'extensions' must be a list of strings", source_path)
        extensions = tuple(cfg_ext)
    if args.no_superscript:
        extensions = tuple(e for e in extensions if e != "superscript")

    # Superscript attributes: config < CLI
    sup_attrs: dict[str, str] = {}
    cfg_attrs = config.get("attributes")
    if isinstance(cfg_attrs, dict):
        cfg_sup = cfg_attrs.get("superscript")
        if isinstance(cfg_sup, dict):
            for k, v in cfg_sup.items():
                sup_attrs[str(k)] = str(v)
    for raw in args.sup_attr:
        name, value = parse_pair_arg(raw, "attribute")
        sup_attrs[name] = value

    # Page options: config < CLI
    standalone = False
    title: str | None = None
    lang: str | None = None
    cfg_html = config.get("html")
    if isinstance(cfg_html, dict):
        if isinstance(cfg_html.get("standalone"), bool):
            standalone = cfg_html["standalone"]
        if isinstance(cfg_html.get("title"), str):
            title = cfg_html["title"]
        if isinstance(cfg_html.get("lang"), str):
            lang = cfg_html["lang"]
    if args.standalone is not None:
        standalone = args.standalone
    if args.title is not None:
        title = args.title
    if args.lang is not None:
        lang = args.lang

    css_files: list[str] = []
    cfg_css = config.get("css")
    if isinstance(cfg_css, dict):
        cfg_css_files = cfg_css.get("files")
        if isinstance(cfg_css_files, list):
            css_files.extend(str(f) for f in cfg_css_files)
    css_files.extend(args.css)

    meta_tags: list[tuple[str, str]] = []
    cfg_meta = config.get("meta")
    if isinstance(cfg_meta, dict):
        for k, v in cfg_meta.items():
            meta_tags.append((str(k), str(v)))
    for raw in args.meta:
        meta_tags.append(parse_pair_arg(raw, "meta"))

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        extensions=extensions,
        sup_attributes=list(sup_attrs.items()),
        standalone=standalone,
        page=PageOptions(title=title, lang=lang, css_files=css_files, meta_tags=meta_tags),
        watch=args.watch,
        debug=args.debug,
        lint=args.lint,
    )


def compile_file(options: CliOptions) -> str:
    """Read, parse, transform, and render an input file to HTML."""
    from caretsup.ast import KIND_SUPERSCRIPT
    from caretsup.debug import dump_ast
    from caretsup.extension import resolve_extensions
    from caretsup.lint import lint
    from caretsup.markdown import Markdown
    from caretsup.page import render_page
    from caretsup.transform import attach_attributes

    md = Markdown(resolve_extensions(options.extensions))

    source = options.input_file.read_text(encoding="utf-8")
    doc = md.parse(source)
    doc = attach_attributes(doc, KIND_SUPERSCRIPT, tuple(options.sup_attributes))

    if options.debug:
        dump_ast(doc, source)

    if options.lint:
        for finding in lint(source, md):
            print(finding.format(str(options.input_file)), file=sys.stderr)

    html = md.render(doc, source)
    if options.standalone:
        html = render_page(html, options.page)
    return html


def _write(options: CliOptions, html: str) -> None:
    if options.output_file:
        options.output_file.write_text(html, encoding="utf-8")
    else:
        sys.stdout.write(html)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, recompile on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write(options, compile_file(options))
                    print(f"Compiled {options.input_file}", file=sys.stderr)
                except (OSError, UnicodeDecodeError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 2

    try:
        if options.watch:
            from caretsup.extension import resolve_extensions

            resolve_extensions(options.extensions)
            watch_loop(options)
            return 0
        html = compile_file(options)
    except ConfigError as exc:
        print(exc.format(), file=sys.stderr)
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _write(options, html)
    return 0


def run() -> None:
    """Console script wrapper around main()."""
    sys.exit(main())
