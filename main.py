import argparse
import json
import logging
import sys

from core.access import AccessContext
from core.config_loader import load_config
from core.matcher import MatchFinderService, exclude_engaged_candidates
from database.init_db import init_db
from database.uow import buddy_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_find_matches(user_id: str, top_k: int = None, include_engaged: bool = False) -> int:
    """Print the best matches for ``user_id`` as JSON."""
    config = load_config()
    access = AccessContext.for_user(user_id)

    with buddy_uow() as uow:
        finder = MatchFinderService(uow.users, uow.scores, config.matching)
        limit = top_k or config.matching.top_k

        engaged = set()
        if not include_engaged:
            engaged = uow.connections.get_connected_user_ids(user_id)
            engaged |= uow.match_requests.get_counterpart_ids(user_id)

        result = finder.find_matches(access, top_k=limit + len(engaged))
        matches = exclude_engaged_candidates(result.matches, engaged)[:limit]

    if result.needs_analysis:
        logger.warning(result.message)

    print(json.dumps({
        "message": result.message,
        "needs_analysis": result.needs_analysis,
        "matches": [m.to_dict() for m in matches],
    }, indent=2))
    return 0


def run_server(host: str = None, port: int = None) -> int:
    import uvicorn

    config = load_config()
    host = host or config.web.host
    port = port or config.web.port
    logger.info(f"Starting Buddy Finder API on {host}:{port}")
    uvicorn.run("web.backend.app:app", host=host, port=port, reload=False, log_level="info")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(description="Buddy Finder")
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create database tables')

    find_parser = subparsers.add_parser('find-matches', help='Print the best matches for a user')
    find_parser.add_argument('--user-id', required=True, help='User to find matches for')
    find_parser.add_argument('--top-k', type=int, default=None, help='Maximum matches to print')
    find_parser.add_argument('--include-engaged', action='store_true',
                             help='Keep users already connected or with a match request')

    serve_parser = subparsers.add_parser('serve', help='Run the HTTP API')
    serve_parser.add_argument('--host', default=None)
    serve_parser.add_argument('--port', type=int, default=None)

    args = parser.parse_args(argv)
    logger.info(f"Buddy Finder starting: {args.command}")

    if args.command == 'init-db':
        init_db()
        return 0
    if args.command == 'find-matches':
        return run_find_matches(args.user_id, args.top_k, args.include_engaged)
    return run_server(args.host, args.port)


if __name__ == "__main__":
    sys.exit(main())
