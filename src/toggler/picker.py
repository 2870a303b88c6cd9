"""
Picker adapter for Toggler.

Turns the configured features into display rows for a fuzzy picker widget and
wires up its callbacks:

1. each feature is validated on its own; an invalid one is reported and left
   out instead of breaking the whole list
2. `format` splits a row into styled segments (icon, name, description)
3. `confirm` toggles every marked row, or the highlighted one when nothing is
   marked

The widget itself (rendering, filtering, key handling) lives in
toggler.ui.textual.
"""

from dataclasses import dataclass
from typing import Callable, Collection, List, Optional, Protocol, Sequence, Tuple

from toggler.actions import ActionResult, execute_feature_action, read_feature_state
from toggler.context import AppContext
from toggler.core.config import PickerWindowConfig
from toggler.domain.errors import ActionExecutionError
from toggler.domain.features import Feature, validate_feature

Segment = Tuple[str, Optional[str]]


@dataclass(frozen=True)
class DisplayRow:
    """Display version of a Feature, rebuilt every time the picker opens.

    Attributes:
        index: Position of the feature in the configured list (1-based)
        name: Feature name
        description: Feature description, "" when not set
        icon: Icon reflecting the state when the row was built
        is_enabled: State when the row was built
        text: Plain text the picker matches against
        feature: Source feature
    """

    index: int
    name: str
    description: str
    icon: str
    is_enabled: bool
    text: str
    feature: Feature


ConfirmCallback = Callable[[Sequence[DisplayRow], Optional[DisplayRow]], List[ActionResult]]
FormatCallback = Callable[[DisplayRow, Collection[int]], List[Segment]]


class PickerWidget(Protocol):
    """A picker that shows rows and calls back when the user confirms."""

    def show(
        self,
        rows: Sequence[DisplayRow],
        window: PickerWindowConfig,
        confirm: ConfirmCallback,
        format: FormatCallback,
    ) -> None: ...


class FeaturePicker:
    """Builds picker rows from the registry and handles confirmation."""

    def __init__(self, ctx: AppContext, widget: PickerWidget):
        self.ctx = ctx
        self.widget = widget

    def _icon_for(self, feature: Feature, is_enabled: bool) -> str:
        icons = self.ctx.config.icons
        if is_enabled:
            return feature.icons.enabled or icons.enabled
        return feature.icons.disabled or icons.disabled

    def build_rows(self) -> List[DisplayRow]:
        """Build one row per valid feature, reporting the invalid ones."""
        rows: List[DisplayRow] = []
        for idx, feature in enumerate(self.ctx.registry, start=1):
            error = validate_feature(feature, self.ctx.host.evaluate)
            if error:
                self.ctx.notify(f"Toggler: Invalid feature configuration: {error}", "error")
                continue

            try:
                is_enabled = read_feature_state(self.ctx, feature)
            except ActionExecutionError as e:
                self.ctx.notify(f"Toggler: Invalid feature configuration: {e}", "error")
                continue

            icon = self._icon_for(feature, is_enabled)
            rows.append(
                DisplayRow(
                    index=idx,
                    name=feature.name,
                    description=feature.description,
                    icon=icon,
                    is_enabled=is_enabled,
                    text=f"{icon}  {feature.name} {feature.description}",
                    feature=feature,
                )
            )
        return rows

    def confirm(
        self, selected: Sequence[DisplayRow], current: Optional[DisplayRow]
    ) -> List[ActionResult]:
        """
        Toggle the marked rows, or the highlighted row if none are marked.

        Each row is flipped from its state at confirmation time, in order. A
        failing row is reported and the remaining rows are still attempted.

        Args:
            selected: Rows the user marked, in selection order
            current: Row under the cursor

        Returns:
            One ActionResult per attempted row
        """
        rows = list(selected) if selected else ([current] if current else [])

        results: List[ActionResult] = []
        for row in rows:
            try:
                state = read_feature_state(self.ctx, row.feature)
            except ActionExecutionError as e:
                self.ctx.notify(str(e), "error")
                results.append(ActionResult(row.name, not row.is_enabled, ok=False, error=e))
                continue
            results.append(execute_feature_action(self.ctx, row.feature, not state))
        return results

    def format(self, row: DisplayRow, selected_indices: Collection[int]) -> List[Segment]:
        """
        Split a row into (text, highlight group) segments.

        Groups are named TogglerPicker{Icon,Name,Description}{On,Off} with a
        "Selected" suffix for marked rows.
        """
        state = "On" if row.is_enabled else "Off"
        suffix = "Selected" if row.index in selected_indices else ""

        segments: List[Segment] = [
            (row.icon, f"TogglerPickerIcon{state}{suffix}"),
            ("  ", None),
            (row.name, f"TogglerPickerName{state}{suffix}"),
        ]
        if row.description:
            segments.append((" ", None))
            segments.append((row.description, f"TogglerPickerDescription{state}{suffix}"))
        return segments

    def open(self) -> None:
        """Build fresh rows and show them in the widget."""
        rows = self.build_rows()
        if not rows:
            self.ctx.notify("Toggler: No features to show", "warning")
            return
        self.widget.show(rows, self.ctx.config.window, self.confirm, self.format)
