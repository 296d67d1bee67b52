"""
CLI entry point for featweaver.

Usage:
    featweaver build                   Generate spells, boosts and wiring
    featweaver modules                 Show discovered modules in load order
    featweaver selector <text>         Parse a selector and show the result
    featweaver init-config             Write a default config file
"""

import argparse
import logging
import sys
from pathlib import Path

from featweaver import __version__


def _load_config(args):
    from .config import get_config

    config = get_config(Path(args.config) if args.config else None)
    if args.game_path:
        config.game_install_paths = [Path(p) for p in args.game_path]
    return config


def cmd_build(args):
    """Generate the stat files and wiring."""
    from .pipeline import run_build
    from .resolver import LoadOrderError
    from .weaver import ExpansionLimitError, UnimplementedSelectorError, UnknownCandidateError

    config = _load_config(args)
    output = Path(args.output) if args.output else None

    try:
        summary = run_build(config, output)
    except (LoadOrderError, UnimplementedSelectorError,
            UnknownCandidateError, ExpansionLimitError) as e:
        print(f"Build failed: {e}", file=sys.stderr)
        return 1

    print(f"Load order: {', '.join(summary.load_order) or '(none)'}")
    print(f"Feats: {summary.feat_count}")
    print(f"Spells: {summary.spell_count}")
    print(f"Boosts: {summary.boost_count}")
    print(f"Wrote {len(summary.written)} files")
    return 0


def cmd_modules(args):
    """Show merged modules in load order."""
    from .pipeline import load_modules
    from .resolver import LoadOrderError

    config = _load_config(args)
    try:
        modules = load_modules(config)
    except LoadOrderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for module in modules:
        deps = ", ".join(module.dependency_names) or "-"
        print(f"{module.name} v{module.version_string} "
              f"({len(module.feats)} feats) <- {deps}")
    return 0


def cmd_selector(args):
    """Parse a selector and show the result."""
    from .parser import UnknownSelector, parse_selector

    selector = parse_selector(args.text)
    print(selector)
    if isinstance(selector, UnknownSelector):
        return 1
    return 0


def cmd_init_config(args):
    """Write a default config file."""
    from .config import write_default_config

    path = write_default_config(Path(args.path) if args.path else None)
    print(f"Wrote config: {path}")
    return 0


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Feat spell generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    featweaver build --output ./generated
    featweaver modules --game-path ./Data
    featweaver selector "SelectAbilities(b9149c8e-52c8-46e5-9cb6-fc39301c05fe,2,2,FeatASI)"
"""
    )
    parser.add_argument('--version', action='version', version=f'featweaver {__version__}')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    parser.add_argument('-c', '--config', help='Config file path')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # build
    build_p = subparsers.add_parser('build', help='Generate spells, boosts and wiring')
    build_p.add_argument('-g', '--game-path', action='append', help='Install path (repeatable)')
    build_p.add_argument('-o', '--output', help='Output directory')
    build_p.set_defaults(func=cmd_build)

    # modules
    modules_p = subparsers.add_parser('modules', help='Show modules in load order')
    modules_p.add_argument('-g', '--game-path', action='append', help='Install path (repeatable)')
    modules_p.set_defaults(func=cmd_modules)

    # selector
    selector_p = subparsers.add_parser('selector', help='Parse a selector')
    selector_p.add_argument('text', help='Selector text')
    selector_p.set_defaults(func=cmd_selector)

    # init-config
    init_p = subparsers.add_parser('init-config', help='Write a default config file')
    init_p.add_argument('path', nargs='?', help='Where to write (default ~/.featweaver/config.yaml)')
    init_p.set_defaults(func=cmd_init_config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
