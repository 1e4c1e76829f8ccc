"""Validate the trading bands in an agent answer and print the report.

Usage:
    python run_validation.py answer.md --price 100                  # file input
    cat answer.md | python run_validation.py --price 100 --role GM  # stdin
    python run_validation.py answer.md --price 100 --industry 科技 --atr 2.4
    python run_validation.py answer.md --price 100 --recommend --market-cap 35
    python run_validation.py answer.md --price 100 --json
"""

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from alpha_council.agents.interval_validator import run_interval_validation_pipeline
from alpha_council.config.settings import (
    load_default_role,
    load_log_level,
    load_policy_overrides,
)
from alpha_council.exceptions import AlphaCouncilException, InvalidCurrentPriceError
from alpha_council.schemas.interval_output import AgentRole, StockContext

EXIT_NO_INTERVAL = 1
EXIT_BAD_INPUT = 2


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Alpha Council — trading interval validator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
environment:
  ALPHA_COUNCIL_MIN_BUY_WIDTH_PCT etc.  per-field policy overrides
  ALPHA_COUNCIL_DEFAULT_ROLE            role used when --role is omitted
  ALPHA_COUNCIL_LOG_LEVEL               logging level (default INFO)
""",
    )
    parser.add_argument(
        "file", nargs="?", default=None,
        help="Text file with the agent answer (default: read stdin)",
    )
    parser.add_argument(
        "--price", type=float, required=True,
        help="Current stock price",
    )
    parser.add_argument("--industry", default=None, help="Industry name, e.g. 科技")
    parser.add_argument(
        "--role", default=None, choices=[r.value for r in AgentRole],
        help="Producer role selecting a role policy layer",
    )
    parser.add_argument("--atr", type=float, default=None, help="20-day ATR")
    parser.add_argument("--volatility", type=float, default=None, help="20-day volatility (fraction)")
    parser.add_argument("--market-cap", type=float, default=None, help="Market cap (100M units)")
    parser.add_argument("--amplitude", type=float, default=None, help="Daily amplitude (percent)")
    parser.add_argument(
        "--recommend", action="store_true", default=False,
        help="Use the recommended policy when no environment overrides are set",
    )
    parser.add_argument(
        "--json", action="store_true", default=False,
        help="Print the full validation output as JSON instead of the report",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        logging.basicConfig(level=load_log_level(), stream=sys.stderr)
        overrides = load_policy_overrides() or None
        role = args.role or load_default_role()
    except AlphaCouncilException as e:
        print(f"[Config] {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT

    text = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    context = StockContext(
        current_price=args.price,
        industry=args.industry,
        atr_20d=args.atr,
        volatility_20d=args.volatility,
        market_cap=args.market_cap,
        daily_amplitude=args.amplitude,
    )

    try:
        output = run_interval_validation_pipeline(
            text, context,
            options=overrides,
            agent_role=role,
            use_recommended_options=args.recommend,
        )
    except InvalidCurrentPriceError as e:
        print(f"[Validator] {e.message}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if output is None:
        print("[Validator] No complete buy/sell interval found in input", file=sys.stderr)
        return EXIT_NO_INTERVAL

    if args.json:
        print(output.model_dump_json(indent=2))
    else:
        print(output.report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
