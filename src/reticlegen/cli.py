"""
Command-line interface for the reticle generator.

Provides commands for single renders, color-pair batches, profile
management and writing a default config file.
"""

import argparse
import sys

from reticlegen.config import load_config, save_default_config
from reticlegen.tracer import configure_tracer, get_tracer


def _add_trace_args(parser):
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable runtime tracing",
    )
    parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    parser.add_argument(
        "--trace-file",
        default=None,
        help="Path to write trace logs",
    )
    parser.add_argument(
        "--trace-json",
        action="store_true",
        help="Enable JSON trace output",
    )


def _add_config_args(parser):
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--profile", "-p",
        default=None,
        help="Name of a saved profile to render instead of the config's reticle section",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="reticlegen",
        description="Reticle generator: render crosshair SVG/PNG artifacts from a numeric config",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render a single reticle")
    render_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output file (svg) or path stem (png); defaults to the workspace preview",
    )
    render_parser.add_argument(
        "--format", "-f",
        default="svg",
        choices=["svg", "png"],
        help="Vector or raster output",
    )
    _add_config_args(render_parser)
    _add_trace_args(render_parser)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Render one reticle per CSV color pair")
    batch_parser.add_argument(
        "--csv",
        default=None,
        help="CSV with rim,arm hex pairs (defaults to the workspace library)",
    )
    batch_parser.add_argument(
        "--out", "-o",
        default=None,
        help="Output directory (defaults to the workspace output directory)",
    )
    batch_parser.add_argument(
        "--format", "-f",
        default=None,
        choices=["svg", "png"],
        help="Override the configured output format",
    )
    batch_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print one line per artifact",
    )
    _add_config_args(batch_parser)
    _add_trace_args(batch_parser)

    # Profile commands
    profile_parser = subparsers.add_parser("profile", help="Manage saved profiles")
    profile_subparsers = profile_parser.add_subparsers(dest="profile_command")

    save_parser = profile_subparsers.add_parser("save", help="Save the config's reticle as a profile")
    save_parser.add_argument("name", help="Profile name")
    save_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")

    show_parser = profile_subparsers.add_parser("show", help="Print a profile as JSON")
    show_parser.add_argument("name", help="Profile name")
    show_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")

    list_parser = profile_subparsers.add_parser("list", help="List saved profiles")
    list_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")

    delete_parser = profile_subparsers.add_parser("delete", help="Delete a profile")
    delete_parser.add_argument("name", help="Profile name")
    delete_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")

    # Init config command
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="reticlegen_config.yaml",
        help="Output path for config file",
    )

    return parser, profile_parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser, profile_parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "render":
        return handle_render(args)
    elif args.command == "batch":
        return handle_batch(args)
    elif args.command == "profile":
        if args.profile_command is None:
            profile_parser.print_help()
            return 0
        return handle_profile(args)
    elif args.command == "init-config":
        return handle_init_config(args)

    return 0


def _configure_tracing(args, app_config):
    configure_tracer(
        enabled=args.trace or app_config.tracing.enabled,
        level=args.trace_level if args.trace else app_config.tracing.level,
        file_path=args.trace_file or app_config.tracing.file_path,
        json_output=args.trace_json or app_config.tracing.json_output,
    )


def handle_render(args):
    """Handle the render command."""
    from reticlegen.pipeline import (
        render_png_files, render_svg_file, resolve_reticle_config, resolve_workspace,
    )

    app_config = load_config(args.config)
    _configure_tracing(args, app_config)
    tracer = get_tracer()

    try:
        with tracer.span("cli_render", module="cli"):
            config = resolve_reticle_config(app_config, args.profile)
            out = args.out or resolve_workspace(app_config).preview_svg_path
            if args.format == "svg":
                paths = [render_svg_file(config, out)]
            else:
                stem = out[:-4] if out.endswith(".svg") else out
                paths = list(render_png_files(config, stem, app_config.raster))

        for path in paths:
            print(f"Saved {path}")
        return 0

    except Exception as e:
        tracer.event(f"Render failed: {str(e)}", level="ERROR")
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_batch(args):
    """Handle the batch command."""
    from reticlegen.pipeline import run_batch

    app_config = load_config(args.config)
    if args.format:
        app_config.batch.output_format = args.format
    if args.verbose:
        app_config.batch.verbose = True

    _configure_tracing(args, app_config)
    tracer = get_tracer()

    try:
        with tracer.span("cli_batch", module="cli"):
            count = run_batch(
                app_config=app_config,
                csv_path=args.csv,
                out_dir=args.out,
                profile=args.profile,
            )

        print(f"Generated {count} {app_config.batch.output_format.upper()} crosshairs.")
        return 0

    except Exception as e:
        tracer.event(f"Batch failed: {str(e)}", level="ERROR")
        print(f"\nBatch failed: {str(e)}", file=sys.stderr)
        return 1


def handle_profile(args):
    """Handle the profile subcommands."""
    from reticlegen.pipeline import resolve_workspace
    from reticlegen.profiles import ProfileStore

    app_config = load_config(args.config)
    store = ProfileStore(resolve_workspace(app_config).profiles_dir)

    try:
        if args.profile_command == "save":
            path = store.save(app_config.reticle_config(), args.name)
            print(f"Saved profile to {path}")
        elif args.profile_command == "show":
            print(store.load(args.name).model_dump_json(indent=2))
        elif args.profile_command == "list":
            for name in store.list():
                print(name)
        elif args.profile_command == "delete":
            store.delete(args.name)
            print(f"Deleted profile '{args.name}'")
        return 0

    except Exception as e:
        print(f"\nError: {str(e)}", file=sys.stderr)
        return 1


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
