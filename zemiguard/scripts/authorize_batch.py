"""
Batch Authorization Script
Evaluates JSON-lines decision requests and writes one JSON result per line.
Reads relationships from Supabase with the service role key, or from a JSON
world file with --world for offline checks.

    python -m zemiguard.scripts.authorize_batch requests.jsonl
    python -m zemiguard.scripts.authorize_batch --world world.json < requests.jsonl
"""

import argparse
import json
import logging
import sys
from pydantic import TypeAdapter, ValidationError
from typing import Any, Dict, Iterable, Iterator

from zemiguard.config import settings
from zemiguard.core.decisions import Decision
from zemiguard.core.errors import InvalidDecisionRequest
from zemiguard.core.gateway import DecisionRequest, Gateway
from zemiguard.database.memory_graph import InMemoryRelationshipGraph

logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO), stream=sys.stderr)
logger = logging.getLogger(__name__)

_decision_adapter = TypeAdapter(Decision)


def run_batch(lines: Iterable[str], gateway: Gateway) -> Iterator[Dict[str, Any]]:
    """Evaluate each non-blank line; malformed lines yield an error entry instead of stopping the batch"""
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            request = DecisionRequest.model_validate_json(line)
            decision = gateway.authorize(request)
        except (ValidationError, InvalidDecisionRequest) as e:
            logger.error(f"Line {line_number}: invalid request: {e}")
            yield {"line": line_number, "error": str(e)}
            continue
        yield {
            "line": line_number,
            "allowed": decision.allowed,
            "decision": _decision_adapter.dump_python(decision, mode="json"),
        }


def build_gateway(world_path: str = None) -> Gateway:
    if world_path:
        with open(world_path) as f:
            graph = InMemoryRelationshipGraph.from_world(json.load(f))
        logger.info(f"Loaded relationship world from {world_path}")
    else:
        from zemiguard.database.supabase_client import get_service_supabase
        from zemiguard.database.supabase_graph import SupabaseRelationshipGraph
        graph = SupabaseRelationshipGraph(get_service_supabase())
    return Gateway(graph)


def main(argv=None):
    """Main function to evaluate a batch of decision requests"""
    parser = argparse.ArgumentParser(description="Evaluate JSON-lines authorization requests")
    parser.add_argument("requests", nargs="?", help="JSON-lines file (default: stdin)")
    parser.add_argument("--world", help="JSON world file for an in-memory relationship graph")
    args = parser.parse_args(argv)

    gateway = build_gateway(args.world)
    source = open(args.requests) if args.requests else sys.stdin
    allowed_count = denied_count = error_count = 0
    try:
        for result in run_batch(source, gateway):
            if "error" in result:
                error_count += 1
            elif result["allowed"]:
                allowed_count += 1
            else:
                denied_count += 1
            sys.stdout.write(json.dumps(result) + "\n")
    finally:
        if source is not sys.stdin:
            source.close()

    logger.info(f"Batch completed: {allowed_count} allowed, {denied_count} denied, {error_count} invalid")
    return 1 if error_count else 0


if __name__ == "__main__":
    sys.exit(main())
