"""
CLI entrypoint for running scan cycles against a chain snapshot file.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import load_config, apply_env_overrides, apply_cli_overrides, RunConfig
from ..data.frames import FrameMarketData
from ..execution.sinks import DryRunOrderSink, JsonFileOrderSink
from ..scan import list_scanners
from .loop import run_loop

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def resolve_config(config_path: Optional[str], sets: List[str], chain: Optional[str], once: bool) -> RunConfig:
    """Config file (or defaults) -> env overrides -> --set overrides -> flag overrides"""
    config = load_config(config_path) if config_path else RunConfig()
    config = apply_env_overrides(config)
    if sets:
        config = apply_cli_overrides(config, sets)
    if chain:
        config.data.chain_path = chain
    if once:
        config.loop.max_cycles = 1
    return config


def cmd_list_scanners():
    print("\n".join(list_scanners()))


def cmd_dry_run(config: RunConfig):
    """Print the resolved configuration without scanning"""
    print(json.dumps(config.model_dump(), indent=2))


def cmd_run(config: RunConfig, out_dir: Optional[str]) -> int:
    if config.loop.live:
        raise ValueError("loop.live=true needs a broker client; the CLI only runs dry cycles")
    if not config.data.chain_path:
        raise ValueError("data.chain_path is required (or pass --chain)")

    market = FrameMarketData.from_csv(config.data.chain_path)
    conid = config.orders.underlying_contract_id
    if out_dir:
        sink = JsonFileOrderSink(out_dir=Path(out_dir), underlying_contract_id=conid)
    else:
        sink = DryRunOrderSink(underlying_contract_id=conid)
    return run_loop(config, market, market, sink)


def main():
    """Main CLI entrypoint"""
    parser = argparse.ArgumentParser(
        description="Options spread arbitrage scanner - CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One dry-run cycle over a chain snapshot
  python -m spread_arb.run --config configs/spx_arb.yaml --chain chain.csv --once

  # Only butterflies, tighter pricing
  python -m spread_arb.run --config configs/spx_arb.yaml --set scan.strategies='["Butterfly"]' --set orders.discount_factor=0.8

  # Write order batches as JSON instead of logging them
  python -m spread_arb.run --config configs/spx_arb.yaml --out-dir orders/
        """,
    )
    parser.add_argument("--config", type=str, help="Path to config file (YAML or JSON)")
    parser.add_argument("--chain", type=str, help="Override data.chain_path")
    parser.add_argument(
        "--set",
        action="append",
        dest="sets",
        metavar="KEY=VALUE",
        help="Override config value (can be used multiple times). Use nested keys: orders.fill_type=3",
    )
    parser.add_argument("--out-dir", type=str, help="Write order batches to this directory as JSON")
    parser.add_argument("--once", action="store_true", help="Run a single cycle")
    parser.add_argument("--list-scanners", action="store_true", help="List available scanners and exit")
    parser.add_argument("--dry-run", action="store_true", help="Print the resolved config and exit")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args()
    setup_logging(args.log_level)

    if args.list_scanners:
        cmd_list_scanners()
        return 0

    try:
        config = resolve_config(args.config, args.sets or [], args.chain, args.once)
        if args.dry_run:
            cmd_dry_run(config)
            return 0
        cycles = cmd_run(config, args.out_dir)
        logger.info(f"Completed {cycles} cycles")
        return 0
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Run failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
