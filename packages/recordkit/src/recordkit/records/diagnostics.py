# recordkit/records/diagnostics.py
"""Non-fatal reporting of decoration conditions."""
from __future__ import annotations

import logging
from typing import Any, Mapping

from recordkit.exceptions import DecorationCondition

logger = logging.getLogger("recordkit.records")

__all__ = ["report"]


def report(condition: DecorationCondition, *, conf: Mapping[str, Any] | None = None, enabled: bool = True) -> None:
    """Log ``condition`` at its level.

    With ``RAISE_ON_ERROR`` set in ``conf``, error-level conditions are raised
    instead. Nothing happens when ``enabled`` is False.
    """
    if not enabled:
        return
    if conf is not None and conf.get("RAISE_ON_ERROR") and not condition.is_notice:
        raise condition
    logger.log(condition.level, "[%s] %s", type(condition).__name__, condition)
