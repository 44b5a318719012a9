"""
Command Line Entry
Loads a surface and prints its structural tree as JSON.
"""

import argparse
import asyncio
import sys

from a2ui_client.core import A2UIError, Settings, configure_logging, get_logger, get_settings, init_tracer, safe_json_dumps
from a2ui_client.session import SurfaceSession

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="a2ui-client", description="Fetch and resolve an A2UI surface")
    parser.add_argument("url", nargs="?", help="surface URL or path (default: A2UI_STREAM_PATH)")
    parser.add_argument("--base-url", help="agent server base URL (default: A2UI_BASE_URL)")
    parser.add_argument("--log-level", help="log level (default: A2UI_LOG_LEVEL)")
    parser.add_argument("--json-logs", action="store_true", help="emit JSON logs")
    return parser


async def run_async(url: str | None = None, settings: Settings | None = None) -> int:
    """Load one surface and print it. Returns the process exit code."""
    async with SurfaceSession(settings=settings) as session:
        try:
            await session.load(url)
        except A2UIError as e:
            logger.error("load_failed", error=str(e), error_type=type(e).__name__)
            return 1

        tree = session.render()
        surface = session.store.surface
        print(
            safe_json_dumps(
                {
                    "surfaceId": surface.surface_id if surface else None,
                    "root": surface.root_id if surface else None,
                    "tree": tree.to_dict() if tree else None,
                },
                indent=2,
            )
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point - parse arguments and run."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.base_url:
        settings = settings.model_copy(update={"base_url": args.base_url})
    configure_logging(args.log_level or settings.log_level, args.json_logs or settings.json_logs)
    init_tracer("a2ui-client")

    return asyncio.run(run_async(args.url, settings))


if __name__ == "__main__":
    sys.exit(main())
