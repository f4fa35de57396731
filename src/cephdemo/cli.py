"""
cephdemo command line.

Usage:
    cephdemo bootstrap [--no-watch]
    cephdemo status [--json]
    cephdemo serve [--host HOST] [--port PORT]

Environment Variables:
    ADMIN_SECRET: client.admin key (generated when unset)
    OSD_DEVICE: Block device for a ceph-volume OSD (directory OSD when unset)
    OSD_MAX_OBJECT_SIZE: osd_max_object_size written to the config
    CEPH_PUBLIC_NETWORK: Public and cluster network CIDR
    CEPH_DEMO_*: Any other setting, e.g. CEPH_DEMO_CLUSTER
"""

import argparse
import asyncio
import json
import logging
import sys

from . import __version__
from .bootstrap.orchestrator import DemoBootstrap
from .bootstrap.report import load_report
from .core.artifacts import collect_artifacts
from .core.config import Settings, get_settings
from .core.errors import BootstrapError
from .core.logging_config import setup_logging

logger = logging.getLogger("cephdemo")


def cmd_bootstrap(args: argparse.Namespace, settings: Settings) -> int:
    bootstrap = DemoBootstrap(settings=settings)
    try:
        asyncio.run(bootstrap.run())
        if args.watch:
            bootstrap.watch()
    except BootstrapError as e:
        logger.error("ERROR- %s", e)
        return e.exit_code
    return 0


def cmd_status(args: argparse.Namespace, settings: Settings) -> int:
    artifacts = collect_artifacts(settings)
    report = asyncio.run(load_report(settings.report_path))

    if args.json:
        print(
            json.dumps(
                {
                    "artifacts": [
                        {
                            "name": a.name,
                            "kind": a.kind.value,
                            "path": str(a.path),
                            "exists": a.exists,
                        }
                        for a in artifacts
                    ],
                    "bootstrap": report.to_dict() if report else None,
                },
                indent=2,
            )
        )
        return 0

    print(f"Cluster {settings.cluster} on {settings.hostname}")
    for a in artifacts:
        mark = "x" if a.exists else " "
        print(f"  [{mark}] {a.name:<20} {a.path}")

    if report is None:
        print("No bootstrap recorded")
        return 0

    outcome = "succeeded" if report.succeeded else f"failed: {report.error}"
    print(f"Last bootstrap {outcome}")
    for phase in report.phases:
        print(f"  {phase.name:<10} {phase.state.value:<10} {phase.detail}")
    return 0


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    from .api.main import run

    run(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cephdemo", description="Bootstrap a single-node Ceph demo cluster"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level", default=None, help="Logging level (default: $CEPH_DEMO_LOG_LEVEL or INFO)"
    )
    subparsers = parser.add_subparsers(dest="command")

    bootstrap = subparsers.add_parser("bootstrap", help="Bootstrap mon, mgr and OSDs, then watch")
    bootstrap.add_argument(
        "--no-watch",
        dest="watch",
        action="store_false",
        help="Return after bootstrap instead of running 'ceph -w'",
    )
    bootstrap.set_defaults(func=cmd_bootstrap)

    status = subparsers.add_parser("status", help="Show bootstrap artifacts and last run")
    status.add_argument("--json", action="store_true", help="Print JSON")
    status.set_defaults(func=cmd_status)

    serve = subparsers.add_parser("serve", help="Run the read-only status API")
    serve.add_argument("--host", default=None, help="Bind address (default: $CEPH_DEMO_API_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: $CEPH_DEMO_API_PORT)")
    serve.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # The container entrypoint runs the bootstrap by default
    if args.command is None:
        args.func = cmd_bootstrap
        args.watch = True

    settings = get_settings()
    setup_logging(
        "cephdemo",
        level=args.log_level or settings.log_level,
        log_file=settings.log_file,
    )

    return args.func(args, settings)


if __name__ == "__main__":
    sys.exit(main())
