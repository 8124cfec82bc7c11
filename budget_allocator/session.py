"""Application shell that owns the current allocation snapshot.

The dashboard keeps one :class:`AllocationSession` per browser session and
forwards widget events to it. Every handler applies a mutation to the latest
snapshot and returns the freshly derived :class:`ViewModel`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .derivation import ViewModel, derive
from .model import AllocationModel, initialize, reset
from .mutations import set_budget, set_category_percent, set_currency

logger = logging.getLogger(__name__)


class AllocationSession:
    """Holds the single current snapshot and routes inbound events."""

    def __init__(self, model: Optional[AllocationModel] = None):
        """Initialize the session.

        Args:
            model: Starting snapshot. Defaults to the preset.
        """
        self._model = model if model is not None else initialize()
        self._view = derive(self._model)
        logger.info(
            "Allocation session started with %d categories, budget %s %s",
            len(self._model), self._model.budget, self._model.currency_code,
        )

    @property
    def model(self) -> AllocationModel:
        return self._model

    @property
    def view(self) -> ViewModel:
        return self._view

    def _apply(self, model: AllocationModel) -> ViewModel:
        # Unchanged snapshots keep the existing view.
        if model is not self._model:
            self._model = model
            self._view = derive(model)
        return self._view

    def on_percent_edited(self, key: str, value: Any) -> ViewModel:
        return self._apply(set_category_percent(self._model, key, value))

    def on_budget_edited(self, value: Any) -> ViewModel:
        return self._apply(set_budget(self._model, value))

    def on_currency_changed(self, code: Any) -> ViewModel:
        return self._apply(set_currency(self._model, code))

    def on_reset_requested(self) -> ViewModel:
        logger.info("Resetting allocation to the preset")
        return self._apply(reset(self._model))
