"""
Command line runner for the travel retraining backend.

Used by the platform scheduler for the daily verification job and by
operators for one-off runs.

Usage:
    travel-ml verify-places
    travel-ml check-retrain --store-path ./data/store.json
    travel-ml stats
    travel-ml serve --port 5001
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from travel_ml import config
from travel_ml.api.callables import (
    get_model_download_url,
    get_model_stats,
    manual_retrain,
    scheduled_place_verification,
)
from travel_ml.errors import CallableError, RetrainingError
from travel_ml.store.json_store import JsonFileDocumentStore
from travel_ml.training.retraining import RetrainingOrchestrator

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Travel recommendation retraining backend')
    parser.add_argument('--store-path', type=str, default=config.STORE_PATH,
                        help='Path to the JSON document store')

    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('verify-places', help='Run scheduled auto-verification once')
    subparsers.add_parser('retrain', help='Retrain on all pending places')
    subparsers.add_parser('check-retrain', help='Retrain if the pending threshold is reached')
    subparsers.add_parser('stats', help='Print training backlog statistics')
    subparsers.add_parser('download-info', help='Print model download metadata')

    serve = subparsers.add_parser('serve', help='Run the HTTP service')
    serve.add_argument('--host', type=str, default=config.HOST)
    serve.add_argument('--port', type=int, default=config.PORT)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    store = JsonFileDocumentStore(args.store_path)

    if args.command == 'serve':
        from travel_ml.api.ml_service import create_app
        create_app(store).run(host=args.host, port=args.port, debug=False)
        return 0

    try:
        if args.command == 'verify-places':
            output = {'verified': scheduled_place_verification(store)}
        elif args.command == 'retrain':
            output = manual_retrain(store)
        elif args.command == 'check-retrain':
            output = RetrainingOrchestrator(store).check_and_retrain().to_dict()
        elif args.command == 'stats':
            output = get_model_stats(store)
        else:
            output = get_model_download_url(store)
    except CallableError as e:
        print(json.dumps(e.to_dict(), indent=2))
        return 1
    except RetrainingError as e:
        logger.error(f"Retraining failed: {e}")
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
