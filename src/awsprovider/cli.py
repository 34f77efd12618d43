import argparse

from awsprovider.config import Config
from awsprovider.models import GroupBy, GroupByKey, GroupByType, Granularity, Metric


def _parse_group_by(value: "str") -> "GroupBy":
    """
    parses a group-by in format 'DIMENSION:SERVICE' or 'TAG:team'.
    A bare key is taken as a dimension.
    """
    type_name, sep, key = value.partition(":")
    if not sep:
        type_name, key = GroupByType.DIMENSION.value, type_name

    try:
        group_type = GroupByType(type_name.upper())
    except ValueError:
        raise argparse.ArgumentTypeError(f"unknown group-by type: {type_name}")

    if group_type is GroupByType.DIMENSION:
        try:
            return GroupBy(key=GroupByKey(key.upper()), type=group_type)
        except ValueError:
            raise argparse.ArgumentTypeError(f"unknown dimension: {key}")

    return GroupBy(key=key, type=group_type)


def build_parser() -> "argparse.ArgumentParser":
    parser = argparse.ArgumentParser(
        prog="awsprovider",
        description="S3 object and Cost Explorer convenience commands",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    parser.add_argument(
        "--aws.region",
        dest="aws_region",
        default=None,
        help="AWS region (default: $AWS_REGION or us-east-1)",
    )
    parser.add_argument(
        "--aws.endpoint-url",
        dest="endpoint_url",
        default=None,
        help="Custom endpoint URL, e.g. for LocalStack",
    )
    parser.add_argument(
        "--metrics.textfile",
        dest="metrics_textfile",
        default=None,
        help="Write operation metrics to this file in Prometheus text format",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    upload = commands.add_parser("upload", help="Upload a file as an object")
    upload.add_argument("bucket")
    upload.add_argument("key")
    upload.add_argument("file", help="Path of the file to upload")

    fetch = commands.add_parser("fetch", help="Print an object's body")
    fetch.add_argument("bucket")
    fetch.add_argument("key")

    delete = commands.add_parser("delete", help="Delete an object")
    delete.add_argument("bucket")
    delete.add_argument("key")

    cost = commands.add_parser("cost", help="Query cost and usage")
    cost.add_argument("--start", required=True, help="Start date, YYYY-MM-DD (inclusive)")
    cost.add_argument("--end", required=True, help="End date, YYYY-MM-DD (exclusive)")
    cost.add_argument(
        "--granularity",
        type=Granularity,
        default=Granularity.DAILY,
        choices=list(Granularity),
    )
    cost.add_argument(
        "--metric",
        dest="metrics",
        action="append",
        type=Metric,
        choices=list(Metric),
        help="Metric to return, repeatable (default: UNBLENDED_COST)",
    )
    cost.add_argument(
        "--group-by",
        dest="group_by",
        action="append",
        type=_parse_group_by,
        default=[],
        help="TYPE:KEY grouping, repeatable (e.g. DIMENSION:SERVICE)",
    )
    cost.add_argument("--next-page-token", dest="next_page_token", default=None)

    return parser


def parse_args(
    argv: "list[str] | None" = None,
) -> "tuple[Config, argparse.Namespace]":
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    config.log_level = args.log_level
    if args.aws_region:
        config.aws_region = args.aws_region
    if args.endpoint_url:
        config.endpoint_url = args.endpoint_url
    if args.metrics_textfile:
        config.metrics_textfile = args.metrics_textfile
    return config, args
