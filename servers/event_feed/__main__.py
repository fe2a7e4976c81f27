"""
Entry point for the event feed.

Runs each selected provider pipeline in turn and prints its stats, or the
events themselves as JSON with --json.

Run with: python -m servers.event_feed [--provider meetup] [--json]
"""

import argparse
import asyncio
import json

from .sources import PROVIDERS


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch upcoming events per provider")
    parser.add_argument(
        "--provider",
        action="append",
        choices=sorted(PROVIDERS),
        help="Provider to query (repeatable, default: all)",
    )
    parser.add_argument("--json", action="store_true", help="Print events as JSON")
    return parser.parse_args(argv)


async def main(argv=None) -> dict:
    """Run the selected pipelines and return results keyed by provider."""
    args = parse_args(argv)
    providers = args.provider or sorted(PROVIDERS)

    results = {}
    for name in providers:
        result = await PROVIDERS[name]()
        results[name] = result

        if not args.json:
            stats = result.stats
            print(f"{name}: {stats.count} events ({stats.status}, {stats.pages} pages, {stats.rejected} rejected)")

    if args.json:
        print(json.dumps({name: r.model_dump()["events"] for name, r in results.items()}, indent=2))

    return results


if __name__ == "__main__":
    asyncio.run(main())
