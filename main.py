"""
Entrypoint: load config, init logging, print one division's listing or the stats
"""

import argparse
import asyncio
import json
import sys

import structlog

from proftafla import create_service
from proftafla.config import Config
from proftafla.logs import configure_logging


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Próftafla lookups")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("slug", nargs="?", help="division slug, stats for all divisions when omitted")
    group.add_argument("--clear", action="store_true", help="delete every cached division")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace, service) -> int:
    logger = structlog.get_logger(__name__)

    if args.clear:
        cleared = await service.clear_cache()
        logger.info("clear_cache", cleared=cleared)
        return 0 if cleared else 1

    if args.slug:
        result = await service.get_tests(args.slug)
        if result is None:
            logger.error("unknown_slug", slug=args.slug)
            return 1
        print(result.model_dump_json(indent=2))
        return 0

    stats = await service.get_stats()
    print(json.dumps(stats.model_dump(by_alias=True), indent=2))
    return 0


async def main(argv=None) -> int:
    """Initialize dependencies and run a single lookup"""
    args = parse_args(argv)
    config = Config()
    configure_logging(config.logging.get('level', 'INFO'))

    async with create_service(config) as service:
        return await run(args, service)


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
