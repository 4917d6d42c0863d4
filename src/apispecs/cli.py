#!/usr/bin/env python3
"""
api-specs CLI

Commands:
    run         - Run a collection and save the captured traffic as HAR
    generate    - Generate an OpenAPI spec from a collection run or a HAR file

Examples:
    # Run a collection and capture responses
    api-specs run -c api.postman_collection.json -e staging.postman_environment.json -o api-run.har

    # Run and generate an OpenAPI spec (YAML unless the output ends in .json)
    api-specs generate -c api.postman_collection.json -o openapi.yaml

    # Generate from a previously captured HAR
    api-specs generate --har api-run.har -o openapi.json
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .capture import HarExporter, TraceRecorder
from .collection import CollectionLoader
from .errors import ApiSpecsError
from .openapi import OpenAPIExporter, OpenAPIGenerator
from .runner import CollectionRunner, RunConfig, RunResult


def _load_config(args) -> RunConfig:
    config = RunConfig.from_yaml(args.config) if args.config else RunConfig()

    log_level = None
    if args.verbose:
        log_level = "DEBUG"
    elif args.quiet:
        log_level = "WARNING"

    return config.merged(
        timeout=args.timeout,
        verify_ssl=True if args.verify_ssl else None,
        log_level=log_level,
        title=getattr(args, 'title', None),
        version=getattr(args, 'api_version', None)
    )


def _run_collection(args, config: RunConfig) -> RunResult:
    print(f"📡 Running collection: {args.collection}")
    collection = CollectionLoader.load_collection(args.collection)
    environment = CollectionLoader.load_environment(args.environment)
    if environment:
        print(f"   Environment: {environment.name}")

    result = CollectionRunner(collection, environment, config).run()

    print(f"\n📊 Run Summary:")
    print(f"   Total: {result.total_requests}")
    print(f"   Successful: {result.successful_requests} ({result.success_rate:.1f}%)")
    print(f"   Failed: {result.failed_requests}")
    print(f"   Duration: {result.total_duration_sec:.2f}s")
    for failure in result.failures:
        print(f"   ❌ {failure.name}: {failure.message}")

    return result


def cmd_run(args, config: RunConfig) -> int:
    """Run a collection and write the HAR file."""
    result = _run_collection(args, config)
    HarExporter.export(result.trace, args.output)
    print(f"✓ HAR file saved to: {args.output}")
    return 0


def cmd_generate(args, config: RunConfig) -> int:
    """Generate an OpenAPI spec from a collection run or a HAR file."""
    if args.har:
        print(f"📂 Loading HAR: {args.har}")
        trace: TraceRecorder = HarExporter.load(args.har)
    else:
        trace = _run_collection(args, config).trace
        if args.save_har:
            HarExporter.export(trace, args.save_har)
            print(f"✓ HAR file saved to: {args.save_har}")

    spec = OpenAPIGenerator(config=config).from_trace(trace)
    OpenAPIExporter.export(spec, args.output)
    print(f"✓ OpenAPI spec with {len(spec['paths'])} paths saved to: {args.output}")
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('-e', '--environment', metavar='PATH', help='Environment JSON file (optional)')
    parser.add_argument('--config', metavar='PATH', help='YAML run configuration')
    parser.add_argument('--timeout', type=float, metavar='SECONDS', help='Per-request timeout (default: none)')
    parser.add_argument('--verify-ssl', action='store_true', dest='verify_ssl',
                        help='Verify TLS certificates (disabled by default)')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='api-specs',
        description='Run collections against live APIs and generate OpenAPI specs from the responses',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split('Examples:', 1)[1] if __doc__ else None
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Run a collection and capture responses as HAR')
    run_parser.add_argument('-c', '--collection', required=True, metavar='PATH', help='Collection JSON file')
    run_parser.add_argument('-o', '--output', default='api-run.har', metavar='PATH',
                            help='Output HAR file (default: api-run.har)')
    _add_common_arguments(run_parser)
    run_parser.set_defaults(func=cmd_run)

    gen_parser = subparsers.add_parser('generate', help='Generate an OpenAPI spec')
    source = gen_parser.add_mutually_exclusive_group(required=True)
    source.add_argument('-c', '--collection', metavar='PATH', help='Collection JSON file to run')
    source.add_argument('--har', metavar='PATH', help='Existing HAR file to generate from')
    gen_parser.add_argument('-o', '--output', default='openapi-spec.yaml', metavar='PATH',
                            help='Output spec file; .json for JSON, YAML otherwise (default: openapi-spec.yaml)')
    gen_parser.add_argument('--save-har', metavar='PATH', dest='save_har', help='Also save the HAR of the run')
    gen_parser.add_argument('--title', help='API title for the info block')
    gen_parser.add_argument('--api-version', dest='api_version', help='API version for the info block')
    _add_common_arguments(gen_parser)
    gen_parser.set_defaults(func=cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args)
        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.INFO),
            format='%(levelname)s %(name)s: %(message)s'
        )
        return args.func(args, config)
    except ApiSpecsError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
