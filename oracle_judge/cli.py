"""
Oracle Judge CLI

Talks to a running judge service:

    oracle-judge score "Bitcoin will exceed $150,000 by December 31, 2026"
    oracle-judge validate "Tech stocks might crash"
"""

import argparse
import json
import os
import sys
from typing import Any, Dict, Iterator, List, Optional

import requests

from .domain.errors import InvalidStake
from .domain.payout import compute_potential_payout, format_currency, format_odds

JUDGE_SERVICE_URL = os.getenv("JUDGE_SERVICE_URL", "http://localhost:8080")
JUDGE_CLI_TIMEOUT = float(os.getenv("JUDGE_CLI_TIMEOUT", "45.0"))


def stream_snapshots(
    base_url: str, prediction: str, provider: Optional[str] = None, timeout: float = JUDGE_CLI_TIMEOUT
) -> Iterator[Dict[str, Any]]:
    """Yield snapshot dicts from POST /judge; the last one wins."""
    payload = {"prediction": prediction}
    if provider:
        payload["provider"] = provider

    with requests.post(
        f"{base_url.rstrip('/')}/judge", json=payload, stream=True, timeout=timeout
    ) as response:
        if response.status_code != 200:
            raise RuntimeError(f"Judge returned {response.status_code}: {response.text[:200]}")
        for line in response.iter_lines(decode_unicode=True):
            if line:
                yield json.loads(line)


def validate_prediction(
    base_url: str, prediction: str, provider: Optional[str] = None, timeout: float = JUDGE_CLI_TIMEOUT
) -> Dict[str, Any]:
    """One-shot verdict from POST /judge/validate."""
    payload = {"prediction": prediction}
    if provider:
        payload["provider"] = provider

    response = requests.post(f"{base_url.rstrip('/')}/judge/validate", json=payload, timeout=timeout)
    if response.status_code != 200:
        raise RuntimeError(f"Judge returned {response.status_code}: {response.text[:200]}")
    return response.json()


def render(snapshot: Dict[str, Any], stake: float = 100) -> str:
    """One-line summary of a snapshot or verdict, with the payout for ``stake``."""
    def score(name):
        value = snapshot.get(name)
        return "--" if value is None else str(value)

    odds = snapshot.get("payout_odds")
    parts = [
        f"concreteness={score('concreteness_score')}",
        f"boldness={score('boldness_score')}",
        f"odds={format_odds(odds) if odds is not None else '--'}",
    ]
    if odds is not None:
        parts.append(f"{format_currency(stake)} pays {format_currency(compute_potential_payout(stake, odds))}")
    if snapshot.get("is_valid") is not None:
        parts.append("ready" if snapshot["is_valid"] else "needs work")
    line = "  ".join(parts)
    if snapshot.get("ai_comment"):
        line += f'\n  The Oracle says: "{snapshot["ai_comment"]}"'
    if snapshot.get("validation_message"):
        line += f"\n  {snapshot['validation_message']}"
    return line


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="oracle-judge", description="Judge predictions with the Oracle")
    parser.add_argument("--url", default=JUDGE_SERVICE_URL, help="Judge service base URL")
    parser.add_argument("--provider", choices=["anthropic", "google", "openai"], default=None)
    parser.add_argument("--stake", type=float, default=100, help="Stake used for the payout line")
    sub = parser.add_subparsers(dest="command", required=True)

    score_cmd = sub.add_parser("score", help="Stream live analysis")
    score_cmd.add_argument("prediction")
    score_cmd.add_argument("--json", action="store_true", help="Print raw snapshots")

    validate_cmd = sub.add_parser("validate", help="One-shot verdict")
    validate_cmd.add_argument("prediction")
    validate_cmd.add_argument("--json", action="store_true", help="Print raw verdict")

    args = parser.parse_args(argv)

    try:
        if args.command == "score":
            last = None
            for snapshot in stream_snapshots(args.url, args.prediction, args.provider):
                if "error" in snapshot:
                    print(f"ERROR: {snapshot['error']}", file=sys.stderr)
                    return 1
                last = snapshot
                print(json.dumps(snapshot) if args.json else render(snapshot, args.stake))
            return 0 if last and last.get("is_valid") else 2

        verdict = validate_prediction(args.url, args.prediction, args.provider)
        print(json.dumps(verdict, indent=2) if args.json else render(verdict, args.stake))
        return 0 if verdict.get("is_valid") else 2

    except (requests.exceptions.RequestException, RuntimeError, InvalidStake) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
