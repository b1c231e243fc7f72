from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from weightnorm.domain.portfolio.allocators.base import BaseAllocator
from weightnorm.domain.portfolio.balancers.base import BaseBalancer

_log = logging.getLogger(__name__)

ALLOCATORS: Dict[str, BaseAllocator] = {}
BALANCERS: Dict[str, BaseBalancer] = {}


def register_allocator(*, name: str, tags: set[str]):
    """
    Register a raw-weight allocator strategy.
    """
    def deco(cls):
        inst = cls()
        inst.name = name
        inst.tags = tags
        ALLOCATORS[name] = inst
        return cls
    return deco


def register_balancer(*, name: str, tags: set[str]):
    """
    Register a portfolio balancer / rebalancer strategy.
    """
    def deco(cls):
        inst = cls()
        inst.name = name
        inst.tags = tags
        BALANCERS[name] = inst
        return cls
    return deco


def get_allocator(name: str, options: Optional[Mapping[str, Any]] = None) -> BaseAllocator:
    """
    Look up a registered allocator. With `options`, a fresh instance of the
    same class is built from them (e.g. custom splits for fixed_split).
    """
    try:
        registered = ALLOCATORS[name]
    except KeyError:
        raise KeyError(f"No allocator registered with name={name!r}") from None
    if not options:
        return registered
    inst = type(registered)(**dict(options))
    inst.name = registered.name
    inst.tags = registered.tags
    return inst


def get_balancer(name: str) -> BaseBalancer:
    try:
        return BALANCERS[name]
    except KeyError:
        raise KeyError(f"No balancer registered with name={name!r}") from None


def auto_discover() -> None:
    """
    Import all plugin modules so that their decorators run and fill the
    registries above. This is called once during application startup.
    """
    import importlib
    import pkgutil

    bases = (
        "weightnorm.domain.portfolio.allocators",
        "weightnorm.domain.portfolio.balancers",
    )

    for base in bases:
        try:
            pkg = importlib.import_module(base)
        except Exception:
            _log.exception("[plugins] base import failed: %s", base)
            continue

        pkg_path = getattr(pkg, "__path__", None)
        if not pkg_path:
            continue

        for mod in pkgutil.walk_packages(pkg_path, pkg.__name__ + "."):
            try:
                importlib.import_module(mod.name)
            except Exception:
                _log.exception("[plugins] import failed: %s", mod.name)

    _log.info(
        "[plugins] discovered allocators=%d balancers=%d",
        len(ALLOCATORS),
        len(BALANCERS),
    )
