from __future__ import annotations

import logging
from dataclasses import dataclass

from weightnorm.shared.config import load_config, AppConfig
from weightnorm.domain.portfolio.types import RebalanceInstruction, TargetAllocation
from weightnorm.application.plugins import registry as _registry
from weightnorm.application.services.allocation import AllocationService

_log = logging.getLogger(__name__)


@dataclass
class RunResult:
    allocation: TargetAllocation
    instructions: list[RebalanceInstruction]


def _configure_logging(cfg: AppConfig) -> None:
    level = (cfg.logging.level or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run_app(config_path: str) -> RunResult:
    cfg = load_config(config_path)
    _configure_logging(cfg)

    # Discover all allocators and balancers
    _registry.auto_discover()

    portfolio = cfg.portfolio
    try:
        allocator = _registry.get_allocator(portfolio.allocator, portfolio.allocator_options())
        balancer = _registry.get_balancer(portfolio.balancer)
    except KeyError as e:
        raise SystemExit(str(e.args[0]))

    service = AllocationService(allocator=allocator, target=cfg.normalizer.target_bps)
    assets = [a.to_spec() for a in portfolio.assets]

    allocation = service.build(assets)
    _log.info(
        "target allocation (%s): %s sum=%d/%d",
        allocator.name, allocation.weights, allocation.total, allocation.target,
    )

    # refuses off-target allocations
    instructions = balancer.plan(
        portfolio.current_weights,
        allocation,
        threshold_bps=portfolio.threshold_bps,
    )
    for ins in instructions:
        _log.info(
            "%s %s: %d -> %d (%+d bps)",
            ins.side, ins.symbol, ins.from_weight, ins.to_weight, ins.delta_weight,
        )
    return RunResult(allocation=allocation, instructions=instructions)
