"""CLI entry point for the JMA forecast viewer."""

import argparse
import logging

import yaml
from pydantic import ValidationError

from tenki.config.loader import get_config_value, load_config, region_by_slug
from tenki.models.forecast import SlotCap
from tenki.pipeline.forecast_pipeline import ForecastPipeline
from tenki.reporting.advisories import AdvisoryKind

DEFAULT_CONFIG = "tenki.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="tenki",
        description="JMA weather forecast viewer",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level",
    )

    sub = parser.add_subparsers(dest="command")

    # show
    show_p = sub.add_parser("show", help="Print the forecast table")
    show_p.add_argument("--region", default=None, help="Region slug")
    cap_g = show_p.add_mutually_exclusive_group()
    cap_g.add_argument(
        "--weekly", action="store_true", help="Limit to the weekly summary"
    )
    cap_g.add_argument(
        "--short", action="store_true", help="Limit to the short-range summary"
    )
    show_p.add_argument(
        "--advisories", action="store_true", help="Also print static advisories"
    )

    # html
    html_p = sub.add_parser("html", help="Print the forecast and write an HTML table")
    html_p.add_argument("--region", default=None, help="Region slug")
    html_p.add_argument("--out", default=None, help="HTML output path")

    # advisories
    adv_p = sub.add_parser("advisories", help="Print static weekly advisories")
    adv_p.add_argument("--region", default=None, help="Region slug")
    adv_p.add_argument(
        "--kind", choices=[k.value for k in AdvisoryKind], default=None
    )

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. render.placeholder")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (yaml.YAMLError, ValidationError, ValueError, OSError) as e:
        print(f"Error: invalid config {args.config}: {e}")
        return 1

    logging.basicConfig(
        level=args.log_level or config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "show":
            return _cmd_show(config, args)
        elif args.command == "html":
            return _cmd_html(config, args)
        elif args.command == "advisories":
            return _cmd_advisories(config, args)
        elif args.command == "config":
            return _cmd_config(config, args)
    except (KeyError, IndexError, ValueError) as e:
        print(f"Error: {e.args[0] if e.args else e}")
        return 1
    parser.print_help()
    return 1


def _cmd_show(config, args) -> int:
    if args.weekly:
        cap = SlotCap.WEEKLY
    elif args.short:
        cap = SlotCap.SHORT
    else:
        cap = SlotCap.ALL
    pipeline = ForecastPipeline(config)
    result = pipeline.run(args.region, cap=cap, advisories=args.advisories)
    return 0 if result.ok else 1


def _cmd_html(config, args) -> int:
    pipeline = ForecastPipeline(config)
    result = pipeline.run(
        args.region,
        cap=SlotCap.ALL,
        html_path=args.out or config.render.html_path,
    )
    return 0 if result.ok else 1


def _cmd_advisories(config, args) -> int:
    region = region_by_slug(config, args.region)
    kinds = [AdvisoryKind(args.kind)] if args.kind else None
    ForecastPipeline(config).print_advisories(region.name, kinds)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        value = get_config_value(config, args.key)
        if hasattr(value, "model_dump_json"):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
