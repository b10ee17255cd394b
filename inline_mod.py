import argparse
import sys

from inline_core.config import DEFAULT_THEME, InlineConfig, ManifestMode
from inline_core.console import is_verbose, log
from inline_core.errors import InlineModError
from inline_core.highlight import available_themes
from inliner import run


def cmd_list_themes(args=None):
    print("Available themes:")
    for name in available_themes():
        print(f"  - {name}")


def build_config(args):
    """Turn parsed arguments into an InlineConfig."""
    if args.manifest_path is not None:
        mode = ManifestMode.EXPLICIT
    elif args.auto_zscript:
        mode = ManifestMode.AUTO
    elif args.empty_manifest:
        mode = ManifestMode.EMPTY
    else:
        mode = ManifestMode.NONE

    return InlineConfig(
        input=args.input,
        output=args.output,
        theme=args.theme,
        color=not args.no_color,
        manifest_mode=mode,
        manifest_path=args.manifest_path,
        search_above_cwd=args.search_above_cwd,
        verbose=args.verbose,
    )


def cmd_inline(args):
    if args.input is None:
        print("Error: <INPUT> is required", file=sys.stderr)
        sys.exit(1)

    config = build_config(args)
    try:
        target = run(config)
    except InlineModError as e:
        print(f"Error: Inlining Failed:\n{e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: I/O Failed:\n{e}", file=sys.stderr)
        sys.exit(1)

    if target.path is not None and is_verbose():
        log(f"Wrote {target.path}")


def make_parser():
    parser = argparse.ArgumentParser(
        prog="inline-mod",
        description="Inline Rust modules with optional syntax highlighting",
    )
    parser.add_argument("input", nargs="?", help="Crate root to inline (e.g. src/main.rs)")
    parser.add_argument("output", nargs="?", help="Output file (default: stdout, which requires zscript)")
    parser.add_argument("-t", "--theme", default=DEFAULT_THEME, help=f"Highlighting theme (default: {DEFAULT_THEME})")
    parser.add_argument("--no-color", action="store_true", help="Never colorize stdout output")
    parser.add_argument("--list-themes", action="store_true", help="List available themes and exit")

    zscript = parser.add_mutually_exclusive_group()
    zscript.add_argument("-m", "--manifest-path", help="Emit a cargo script using this Cargo.toml")
    zscript.add_argument("--auto-zscript", action="store_true", help="Emit a cargo script using the nearest Cargo.toml")
    zscript.add_argument("--empty-manifest", action="store_true", help="Emit a cargo script with an empty [dependencies] table")

    parser.add_argument("--search-above-cwd", action="store_true",
                        help="Let --auto-zscript search above the current directory")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output (sent to stderr)")
    return parser


def main(argv=None):
    args = make_parser().parse_args(argv)

    if args.list_themes:
        cmd_list_themes(args)
        return
    cmd_inline(args)


if __name__ == "__main__":
    main()
