"""Draft and applied filters for the analytics view.

The user edits a draft filter; nothing changes on screen until the draft is
submitted, at which point it becomes the applied filter and the category
breakdown is recomputed. Both filters are immutable snapshots, so every
change is a replacement of the whole ``FilterState``.
"""
import logging
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from ..errors import ValidationFailure
from ..schemas import CategoryAggregate, Filter, FilterState
from .aggregation import aggregate_by_category, filter_transactions
from .backend_client import BackendClient
from .category_registry import CategoryRegistry
from .transaction_store import TransactionStore

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("category", "type", "start_date", "end_date")


def default_filter(today: date) -> Filter:
    """All expense categories from the first of the month through today."""
    return Filter(start_date=today.replace(day=1), end_date=today)


class FilterController:
    def __init__(
        self,
        store: TransactionStore,
        client: BackendClient,
        categories: CategoryRegistry,
        clock: Callable[[], date] = date.today,
    ):
        self.store = store
        self.client = client
        self.categories = categories
        self.clock = clock

        initial = default_filter(clock())
        self.state = FilterState(draft=initial, applied=initial)
        self.category_data: list[CategoryAggregate] = []
        self.loading = False
        self._sequence = 0

    @property
    def draft(self) -> Filter:
        return self.state.draft

    @property
    def applied(self) -> Filter:
        return self.state.applied

    def recompute(self) -> list[CategoryAggregate]:
        """Rebuild the breakdown from the store using the applied filter."""
        filtered = filter_transactions(self.store.transactions, self.applied)
        self.category_data = aggregate_by_category(filtered)
        return self.category_data

    def edit_draft(self, field: str, value: Any) -> Filter:
        """Change one field of the draft; the applied filter is untouched."""
        return self.edit_draft_many({field: value})

    def edit_draft_many(self, changes: Mapping[str, Any]) -> Filter:
        """Change several draft fields at once.

        Either every change is taken or, on the first bad field or value,
        none is and the draft stays as it was.
        """
        for field in changes:
            if field not in EDITABLE_FIELDS:
                raise ValidationFailure(f"Unknown filter field '{field}'", field=field)
        values = self.draft.model_dump()
        values.update(changes)
        try:
            draft = Filter.model_validate(values)
        except ValidationError as exc:
            field = str(exc.errors()[0]["loc"][0])
            raise ValidationFailure(f"Invalid value for {field}", field=field) from exc

        self.state = self.state.model_copy(update={"draft": draft})
        return draft

    async def submit(self) -> list[CategoryAggregate]:
        """Apply the draft, recompute locally, then prefer the server summary.

        A non-empty server summary replaces the local breakdown, unless
        another submit or a reset happened while it was in flight.
        """
        self._sequence += 1
        ticket = self._sequence

        self.state = self.state.model_copy(update={"applied": self.draft})
        self.loading = True
        logger.debug("Applying filter %s", self.applied)
        self.recompute()

        try:
            server_data = await self.client.fetch_category_summary(self.applied.type.value)
        finally:
            if ticket == self._sequence:
                self.loading = False

        if ticket != self._sequence:
            logger.debug("Dropping stale category summary for submit %d", ticket)
            return self.category_data

        if server_data:
            self.category_data = server_data
        else:
            logger.debug("Using local analysis instead of server summary")
        return self.category_data

    def reset(self) -> list[CategoryAggregate]:
        """Restore the default filter in both slots and recompute."""
        self._sequence += 1
        initial = default_filter(self.clock())
        self.state = FilterState(draft=initial, applied=initial)
        self.loading = False
        return self.recompute()

    def available_categories(self) -> list[str]:
        """Category choices for the draft's type."""
        return self.categories.categories_for_type(self.draft.type.value)
