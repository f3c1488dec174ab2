import argparse
import json
import logging
import os
import sys

from appdirs import user_config_dir  # type: ignore

from stampy.console import error, info, success, warning
from stampy.errors import TemplateError
from stampy.template import DEFAULT_TEMPLATE, parse

logger = logging.getLogger(__name__)

TEMPLATE_KEY = "template"
JSON_KEY = "json_key"
TEMPLATE_ENV = "STAMPY_TEMPLATE"
JSON_KEY_ENV = "STAMPY_JSON_KEY"


def get_config_path() -> str:
    env_path = user_config_dir("stampy", "stampy", roaming=True)
    config_file = os.path.join(env_path, "config.json")
    return config_file


def save_config(config: dict) -> None:
    config_file = get_config_path()
    # make all subdirs of config_file
    os.makedirs(os.path.dirname(config_file), exist_ok=True)
    with open(config_file, "w") as f:
        json.dump(config, f, indent=2)


def create_or_load_config() -> dict:
    config_file = get_config_path()
    try:
        with open(config_file) as f:
            config = json.loads(f.read())
    except FileNotFoundError:
        logger.debug(f"No config file at {config_file}")
        return {}
    except OSError as e:
        logger.warning(f"Could not load config file: {e}")
        return {}
    except ValueError as e:
        logger.warning(f"Ignoring invalid config file {config_file}: {e}")
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Ignoring config file {config_file}: not a JSON object")
        return {}
    return config


def resolve_template(cli_value: str | None, config: dict | None = None) -> str:
    """Pick the template: CLI flag, then environment, then config file, then default."""
    if cli_value:
        return cli_value
    env_value = os.environ.get(TEMPLATE_ENV)
    if env_value:
        return env_value
    if config is None:
        config = create_or_load_config()
    value = config.get(TEMPLATE_KEY)
    if isinstance(value, str) and value:
        return value
    return DEFAULT_TEMPLATE


def resolve_json_key(cli_value: str | None, config: dict | None = None) -> str | None:
    """Pick the JSON key the same way; None means text mode."""
    if cli_value:
        return cli_value
    env_value = os.environ.get(JSON_KEY_ENV)
    if env_value:
        return env_value
    if config is None:
        config = create_or_load_config()
    value = config.get(JSON_KEY)
    if isinstance(value, str) and value:
        return value
    return None


def _show_config(config: dict) -> None:
    info(f"Config file: {get_config_path()}")
    print("-" * 40)
    template = config.get(TEMPLATE_KEY)
    json_key = config.get(JSON_KEY)
    print(f"template: {template if template else f'{DEFAULT_TEMPLATE} (default)'}")
    print(f"json_key: {json_key if json_key else 'not set (text mode)'}")
    for env_var in (TEMPLATE_ENV, JSON_KEY_ENV):
        if os.environ.get(env_var):
            warning(f"{env_var} is set and overrides the config file")


def main(argv: list[str] | None = None) -> int:
    """Main function for stampycfg command - manage stored stampy defaults."""
    parser = argparse.ArgumentParser(
        prog="stampycfg",
        description="Manage the default template and JSON key used by stampy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  stampycfg --set-template '{elapsed:.2f}s {}'   Store a default template
  stampycfg --set-json-key ts                   Default to JSON mode with key "ts"
  stampycfg --clear                             Remove all stored defaults
  stampycfg --show                              Show current settings
        """,
    )

    parser.add_argument(
        "--set-template",
        type=str,
        metavar="TEMPLATE",
        help="Store the default template",
    )

    parser.add_argument(
        "--set-json-key",
        type=str,
        metavar="KEY",
        help="Store the default JSON key (empty string disables JSON mode)",
    )

    parser.add_argument(
        "--clear",
        action="store_true",
        help="Remove all stored settings",
    )

    parser.add_argument(
        "--show",
        action="store_true",
        help="Show the stored settings",
    )

    args = parser.parse_args(argv)

    if args.show:
        _show_config(create_or_load_config())
        return 0

    if args.clear:
        try:
            save_config({})
        except OSError as e:
            logger.error(f"Error clearing config: {e}")
            error(f"Error clearing config: {e}")
            return 1
        success("Cleared stored settings")
        return 0

    if args.set_template is None and args.set_json_key is None:
        # If no specific action, show help
        parser.print_help()
        return 0

    config = create_or_load_config()

    if args.set_template is not None:
        try:
            parse(args.set_template)
        except TemplateError as e:
            error(f"Invalid template: {e}")
            return 1
        config[TEMPLATE_KEY] = args.set_template

    if args.set_json_key is not None:
        if args.set_json_key:
            config[JSON_KEY] = args.set_json_key
        else:
            config.pop(JSON_KEY, None)

    try:
        save_config(config)
    except OSError as e:
        logger.error(f"Error storing config: {e}")
        error(f"Error storing config: {e}")
        return 1
    success(f"Saved settings to {get_config_path()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
