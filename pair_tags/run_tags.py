#!/usr/bin/env python3
"""
Pair Tags CLI
Command-line interface for building Uniswap v2 contract tags.
"""

import asyncio
import argparse
import json
import os
import sys
import logging

from dotenv import load_dotenv

from pair_tags.src.networks import supported_network_ids
from pair_tags.src.orchestrator import TagOrchestrator


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )


async def run_tags(args) -> int:
    """Run the pipeline and print the tags as JSON."""
    orchestrator = TagOrchestrator()

    tags = await orchestrator.run(args.network_id, args.api_key)

    print(json.dumps(tags, ensure_ascii=False, indent=2))
    print_results(orchestrator.metrics.to_dict())
    return 0


def print_results(results):
    """Print pipeline results."""
    out = sys.stderr
    print("\n" + "="*50, file=out)
    print("Pipeline Results", file=out)
    print("="*50, file=out)

    print(f"Status: {results['status']}", file=out)

    if results['duration_seconds']:
        print(f"Duration: {results['duration_seconds']:.2f} seconds", file=out)

    print(f"Pages fetched: {results['pages_fetched']}", file=out)
    print(f"Pairs fetched: {results['pairs_fetched']}", file=out)
    print(f"  - accepted: {results['pairs_accepted']}", file=out)
    print(f"  - rejected: {results['pairs_rejected']}", file=out)
    print("="*50, file=out)


def main():
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description='Uniswap v2 pair tags',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build tags for Ethereum mainnet
  python -m pair_tags.run_tags 1 --api-key <key>

  # Read the key from GRAPH_API_KEY (or a .env file)
  pair-tags 1 > tags.json
        """
    )

    parser.add_argument(
        'network_id',
        help=f"Network (chain) id, one of: {', '.join(supported_network_ids())}"
    )

    parser.add_argument(
        '--api-key',
        default=os.getenv('GRAPH_API_KEY'),
        help='The Graph gateway API key (default: $GRAPH_API_KEY)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args()

    if not args.api_key:
        parser.error('an API key is required (--api-key or GRAPH_API_KEY)')

    # Setup logging
    setup_logging(args.verbose)

    try:
        return asyncio.run(run_tags(args))
    except KeyboardInterrupt:
        print("\n\nPipeline interrupted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
