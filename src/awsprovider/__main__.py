import argparse
import asyncio
import json
import sys

import structlog
from prometheus_client import REGISTRY, CollectorRegistry, write_to_textfile

from awsprovider.cli import parse_args
from awsprovider.config import Config
from awsprovider.logging import setup_logging
from awsprovider.metrics import OperationMetrics
from awsprovider.models import CostQuery, CostQueryFailure, Metric, TimePeriod
from awsprovider.provider.aws import AWSProvider
from awsprovider.provider.base import CloudProvider

logger = structlog.get_logger()


async def run_command(provider: "CloudProvider", args: "argparse.Namespace") -> "int":
    """
    runs a single subcommand against an initialized provider and
    returns the process exit code.
    """
    if args.command == "upload":
        with open(args.file, "rb") as fh:
            data = fh.read()
        print(await provider.upload_object(args.bucket, args.key, data))
        return 0

    if args.command == "fetch":
        sys.stdout.write(await provider.fetch_object(args.bucket, args.key))
        return 0

    if args.command == "delete":
        await provider.delete_object(args.bucket, args.key)
        return 0

    query = CostQuery(
        time_period=TimePeriod(start=args.start, end=args.end),
        granularity=args.granularity,
        metrics=tuple(args.metrics or (Metric.UNBLENDED_COST,)),
        group_by=tuple(args.group_by),
        next_page_token=args.next_page_token,
    )
    result = await provider.query_cost(query)
    if isinstance(result, CostQueryFailure):
        print(json.dumps(result.to_dict(), indent=2))
        return 1

    print(json.dumps(result, indent=2, default=str))
    return 0


def build_provider(
    config: "Config",
    registry: "CollectorRegistry | None" = None,
) -> "AWSProvider":
    if not config.aws_enabled:
        raise SystemExit(
            "No AWS credentials configured. Set AWS_ACCESS_KEY_ID and "
            "AWS_SECRET_ACCESS_KEY environment variables."
        )

    provider = AWSProvider(
        region=config.aws_region,
        endpoint_url=config.endpoint_url,
        logger=structlog.get_logger("awsprovider"),
        metrics=OperationMetrics(registry=registry if registry is not None else REGISTRY),
    )
    provider.initialize(config.credentials)
    return provider


def main(argv: "list[str] | None" = None) -> "int":
    config, args = parse_args(argv)
    setup_logging(config.log_level)
    registry = CollectorRegistry()
    provider = build_provider(config, registry)

    async def _run() -> "int":
        try:
            return await run_command(provider, args)
        finally:
            await provider.close()
            logger.debug("provider_closed")
            if config.metrics_textfile:
                write_to_textfile(config.metrics_textfile, registry)
                logger.debug("metrics_written", path=config.metrics_textfile)

    return asyncio.run(_run())


if __name__ == "__main__":
    sys.exit(main())
