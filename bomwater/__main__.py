"""Command-line access to BoM Water Data Online.

Examples:
  python -m bomwater stations --parameter-type Rainfall
  python -m bomwater stations --station 410730 --station 410731
  python -m bomwater tsid "Water Course Discharge" 410730 DMQaQc.Merged.DailyMean.24HR
  python -m bomwater values 1573010 2020-01-01 2020-01-31 --format csv
  python -m bomwater raw --param request=getParameterTypeList
"""

import argparse
import logging
import sys

from bomwater.client import BomWaterClient, DEFAULT_PARAMETER_TYPE, DEFAULT_STATION_FIELDS
from bomwater.errors import BomWaterError

DEFAULT_VALUE_FIELDS = ["Timestamp", "Value", "Quality Code"]


def _parse_param(text: str) -> tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {text!r}")
    return key, value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bomwater",
        description="Query the BoM Water Data Online KISTERS service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n", 1)[1],
    )

    opts = parser.add_argument_group("Options")
    opts.add_argument("--format", choices=["markdown", "csv"], default="markdown",
                      help="Output format (default: markdown)")
    opts.add_argument("--timeout", type=float, default=60.0, help="Request timeout in seconds (default: 60)")
    opts.add_argument("--strict", action="store_true", help="Fail immediately on transport errors")
    opts.add_argument("--quiet", "-q", action="store_true", help="Only log errors")
    opts.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    stations = sub.add_parser("stations", help="List stations")
    stations.add_argument("--parameter-type", default=DEFAULT_PARAMETER_TYPE,
                          help=f"Parameter type (default: {DEFAULT_PARAMETER_TYPE})")
    stations.add_argument("--station", action="append", dest="stations", metavar="STATION_NO",
                          help="Station number; repeat for several")
    stations.add_argument("--field", action="append", dest="fields", metavar="FIELD",
                          help=f"Return field; repeat for several (default: {','.join(DEFAULT_STATION_FIELDS)})")

    tsid = sub.add_parser("tsid", help="Look up a timeseries ID")
    tsid.add_argument("parameter_type")
    tsid.add_argument("station_number")
    tsid.add_argument("ts_name")

    values = sub.add_parser("values", help="Retrieve timeseries values")
    values.add_argument("ts_id")
    values.add_argument("start_date", help="YYYY-MM-DD")
    values.add_argument("end_date", help="YYYY-MM-DD")
    values.add_argument("--field", action="append", dest="fields", metavar="FIELD",
                        help=f"Return field; repeat for several (default: {','.join(DEFAULT_VALUE_FIELDS)})")

    raw = sub.add_parser("raw", help="Send arbitrary request parameters")
    raw.add_argument("--param", action="append", type=_parse_param, required=True,
                     metavar="KEY=VALUE", help="Request parameter; must include request=...")

    return parser


def run(args, client: BomWaterClient):
    if args.command == "stations":
        return client.get_station_list(args.parameter_type, args.stations, args.fields)
    if args.command == "tsid":
        return client.get_timeseries_id(args.parameter_type, args.station_number, args.ts_name)
    if args.command == "values":
        return client.get_timeseries_values(
            args.ts_id, args.start_date, args.end_date, args.fields or DEFAULT_VALUE_FIELDS
        )
    return client.make_request(dict(args.param))


def main(argv=None, client: BomWaterClient | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Configure logging
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    elif not args.quiet:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.ERROR)

    # Suppress httpx noise
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if client is None:
        client = BomWaterClient(timeout=args.timeout, strict=args.strict)

    try:
        with client:
            table = run(args, client)
    except BomWaterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.format == "csv":
        sys.stdout.write(table.to_csv())
    else:
        print(table.to_markdown())
    return 0


if __name__ == "__main__":
    sys.exit(main())
