"""resjson-sync command line.

Each sub-command maps to one synchronizer operation. Settings are loaded
once per invocation and passed down; the exit status is 0 only when the
operation, or every unit of a bulk operation, succeeded.

Examples:
    python main.py push-resources
    python main.py pull-translations fi-FI,sv-SE
    python main.py push-translation-key main app.title fi-FI
    python main.py add-instruction main app.title "Shown in the title bar"
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dotenv import load_dotenv

from infrastructure.configuration import (
    DEFAULT_CONFIG_FILE,
    ConfigurationError,
    Settings,
    load_settings,
)
from infrastructure.logging import bind_sync_context, configure_logging, get_module_logger
from infrastructure.operations import BatchResult, OperationResult
from integrations.transifex import TransifexClient
from modules.resources import ResourceSynchronizer, ResourceSyncError, to_provider_code
from modules.resources.provider import TranslationProvider

logger = get_module_logger()


def _split(value: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated argument; None stays None."""
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resjson-sync",
        description="Synchronize RESJSON string resources with Transifex.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"RESJSON config file (default: ./{DEFAULT_CONFIG_FILE} when present)",
    )
    parser.add_argument(
        "--translation-mode",
        default=None,
        help="Override transifex.translationMode for pulled translations",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    parser.add_argument(
        "--log-json", action="store_true", help="Render logs as JSON lines"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("project-resources", help="List the resources of the project")

    add = commands.add_parser("add-resource", help="Create a new resource from a source file")
    add.add_argument("slug", help="Resource file name without .resjson")
    add.add_argument("name", nargs="?", default=None, help="Resource display name")
    add.add_argument("--force", action="store_true", help="Add even if the file is ignored")

    commands.add_parser("push-resources", help="Push every source resource")

    push_one = commands.add_parser("push-resource", help="Push a single source resource")
    push_one.add_argument("slug")

    push_tr = commands.add_parser("push-translations", help="Push translation files")
    push_tr.add_argument("locale", nargs="?", default=None, help="Only this locale (xx-YY)")

    push_key = commands.add_parser("push-translation-key", help="Push one key's translations")
    push_key.add_argument("resource")
    push_key.add_argument("key")
    push_key.add_argument("locales", nargs="?", default=None, help="Comma separated xx-YY list")

    pull = commands.add_parser("pull-translations", help="Fetch translations from Transifex")
    pull.add_argument("locales", nargs="?", default=None, help="Comma separated xx-YY list")
    pull.add_argument(
        "--no-order",
        action="store_true",
        help="Do not reorder pulled files after the pull",
    )

    order = commands.add_parser(
        "order-translations", help="Reorder translation files after the source files"
    )
    order.add_argument("locales", nargs="?", default=None, help="Comma separated xx-YY list")
    order.add_argument("--resources", default=None, help="Comma separated resource slugs")

    language = commands.add_parser("create-language", help="Provision languages in Transifex")
    language.add_argument("code", help="Language code or 'all'")

    instruction = commands.add_parser(
        "add-instruction", help="Update the translator comment of a key"
    )
    instruction.add_argument("resource")
    instruction.add_argument("key")
    instruction.add_argument("comment")

    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Load settings from the config file, environment and command line."""
    config_file: Optional[Path] = Path(args.config) if args.config else None
    if config_file is None and Path(DEFAULT_CONFIG_FILE).is_file():
        config_file = Path(DEFAULT_CONFIG_FILE)

    overrides: Dict[str, Any] = {}
    if args.translation_mode:
        overrides["transifex"] = {"translationMode": args.translation_mode}
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    if args.log_json:
        overrides["LOG_JSON"] = True
    return load_settings(config_file, overrides)


def report(outcome: Any) -> bool:
    """Print the outcome of a command and return whether it succeeded."""
    if isinstance(outcome, BatchResult):
        for result in outcome:
            _print_result(result)
        print(
            f"{len(outcome.succeeded)} succeeded, {len(outcome.failed)} failed",
            file=sys.stderr if outcome.failed else sys.stdout,
        )
        return outcome.is_success
    if isinstance(outcome, OperationResult):
        _print_result(outcome)
        return outcome.is_success
    return True


def _print_result(result: OperationResult) -> None:
    if result.is_success:
        print(f"OK   {result.label}: {result.message}")
    else:
        print(f"FAIL {result.label}: [{result.error_code}] {result.message}", file=sys.stderr)


def run_command(args: argparse.Namespace, synchronizer: ResourceSynchronizer) -> bool:
    """Dispatch the parsed command to the synchronizer."""
    command = args.command

    if command == "project-resources":
        resources = synchronizer.list_resources()
        if not resources:
            print("No resources found. You can add resources with add-resource.")
        for resource in resources:
            print(resource.get("name"))
        return True

    if command == "add-resource":
        return report(synchronizer.add_resource(args.slug, args.name, force=args.force))

    if command == "push-resources":
        return report(synchronizer.push_all_resources())

    if command == "push-resource":
        return report(synchronizer.push_resource(args.slug))

    if command == "push-translations":
        return report(synchronizer.push_translations(args.locale))

    if command == "push-translation-key":
        return report(
            synchronizer.push_single_translation_key(args.resource, args.key, _split(args.locales))
        )

    if command == "pull-translations":
        locales = _split(args.locales)
        provider_codes = [to_provider_code(tag) or tag for tag in locales] if locales else None
        pulled = report(synchronizer.pull_translations(provider_codes))
        if args.no_order:
            return pulled
        ordered = report(synchronizer.order_translations(locales=locales))
        return pulled and ordered

    if command == "order-translations":
        return report(
            synchronizer.order_translations(
                resources=_split(args.resources), locales=_split(args.locales)
            )
        )

    if command == "create-language":
        return report(synchronizer.provision_language(args.code))

    if command == "add-instruction":
        return report(synchronizer.update_key_instruction(args.resource, args.key, args.comment))

    raise ValueError(f"Unknown command {command}")


def main(
    argv: Optional[Sequence[str]] = None,
    provider: Optional[TranslationProvider] = None,
) -> int:
    """Command line entry point.

    Args:
        argv: Arguments, defaults to sys.argv[1:]
        provider: Optional provider replacing the Transifex client (tests)

    Returns:
        Process exit status
    """
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = settings_from_args(args)
    except ConfigurationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    configure_logging(log_level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
    synchronizer = ResourceSynchronizer(
        settings, provider or TransifexClient(settings.transifex)
    )

    with bind_sync_context(command=args.command, project=settings.transifex.project_slug):
        try:
            succeeded = run_command(args, synchronizer)
        except ResourceSyncError as e:
            logger.error("command_failed", error=str(e), error_type=type(e).__name__)
            print(f"ERROR: {e}", file=sys.stderr)
            return 1

    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
