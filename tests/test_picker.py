"""Tests for the picker adapter."""

from unittest.mock import MagicMock

import pytest

from toggler.domain.features import (
    CommandAction,
    Feature,
    FeatureIcons,
    HostExpression,
)
from toggler.picker import FeaturePicker

from conftest import FakeHost, Switch, make_ctx


def _switch_feature(name: str, switch: Switch, **extra) -> Feature:
    return Feature.from_options({"name": name, "get": switch.get, "set": switch.set, **extra})


@pytest.fixture
def widget():
    return MagicMock()


class TestBuildRows:
    """Turning features into display rows."""

    def test_rows_follow_configured_order(self, ctx, widget):
        """Rows keep the configured order and 1-based index."""
        rows = FeaturePicker(ctx, widget).build_rows()

        assert [row.name for row in rows] == ["Spelling", "Zen Mode", "Split"]
        assert [row.index for row in rows] == [1, 2, 3]

    def test_row_text_and_icons(self, ctx, widget):
        """Row text and icon reflect the current state."""
        spelling, zen, split = FeaturePicker(ctx, widget).build_rows()

        assert not spelling.is_enabled
        assert spelling.icon == "[ ]"
        assert spelling.text == "[ ]  Spelling Show a red underline for spelling errors."
        assert zen.is_enabled
        assert zen.icon == "[x]"
        assert split.description == ""
        assert split.text == "[ ]  Split "

    def test_feature_icons_override_globals(self, widget):
        """Per-feature icons win over the global ones."""
        on, off = Switch(enabled=True), Switch(enabled=False)
        ctx = make_ctx(
            [
                _switch_feature("A", on, icons={"enabled": "●"}),
                _switch_feature("B", off, icons={"enabled": "●"}),
            ]
        )

        a, b = FeaturePicker(ctx, widget).build_rows()

        assert a.icon == "●"
        assert b.icon == "[ ]"

    def test_invalid_features_are_reported_and_skipped(self, widget):
        """Each invalid feature is reported once and left out."""
        def broken():
            raise RuntimeError("boom")

        host = FakeHost()
        good = Switch()
        ctx = make_ctx(
            [
                Feature(name="Bad", get=broken, set=CommandAction("x")),
                Feature(name="NoSet", get=lambda: True, set=None),
                Feature(name="Missing", get=HostExpression("&nope"), set=CommandAction("x")),
                _switch_feature("Good", good),
            ],
            host,
        )

        rows = FeaturePicker(ctx, widget).build_rows()

        assert [row.name for row in rows] == ["Good"]
        assert rows[0].index == 4
        errors = host.errors()
        assert len(errors) == 3
        assert errors[0] == (
            "Toggler: Invalid feature configuration: "
            "Feature 'Bad' get function throws error: boom"
        )
        assert errors[1] == (
            "Toggler: Invalid feature configuration: Feature 'NoSet' missing required 'set' field"
        )
        assert all(e.startswith("Toggler: Invalid feature configuration: ") for e in errors)


class TestConfirm:
    """Toggling confirmed rows."""

    def test_batch_continues_after_a_failing_row(self, widget):
        """A failing setter in row 2 doesn't stop rows 1, 3 and 4."""
        host = FakeHost()
        switches = [Switch(enabled=False) for _ in range(4)]

        def explode(state):
            raise RuntimeError("setter exploded")

        features = [_switch_feature(f"F{i}", s) for i, s in enumerate(switches, start=1)]
        features[1] = Feature.from_options({"name": "F2", "get": switches[1].get, "set": explode})
        picker = FeaturePicker(make_ctx(features, host), widget)
        rows = picker.build_rows()

        results = picker.confirm(rows, rows[0])

        assert [r.ok for r in results] == [True, False, True, True]
        assert switches[0].calls == [True]
        assert switches[2].calls == [True]
        assert switches[3].calls == [True]
        assert host.errors() == ["Failed to execute feature setter: setter exploded"]

    def test_current_row_used_when_nothing_marked(self, ctx, switch, widget):
        """The highlighted row is toggled when nothing is marked."""
        picker = FeaturePicker(ctx, widget)
        rows = picker.build_rows()

        results = picker.confirm([], rows[1])

        assert [r.feature_name for r in results] == ["Zen Mode"]
        assert switch.calls == [False]

    def test_nothing_to_confirm(self, ctx, widget):
        """No marked rows and no current row does nothing."""
        assert FeaturePicker(ctx, widget).confirm([], None) == []

    def test_state_is_read_at_confirmation_time(self, ctx, switch, widget):
        """The state is re-read when confirming, not taken from the row."""
        picker = FeaturePicker(ctx, widget)
        rows = picker.build_rows()
        switch.enabled = False

        picker.confirm([rows[1]], None)

        assert switch.calls == [True]

    def test_marked_rows_in_selection_order(self, ctx, host, switch, widget):
        """Marked rows are toggled in marking order, ignoring the current row."""
        picker = FeaturePicker(ctx, widget)
        spelling, zen, split = picker.build_rows()

        results = picker.confirm([split, spelling], zen)

        assert [r.feature_name for r in results] == ["Split", "Spelling"]
        assert host.keys == ["<C-w>v"]
        assert host.commands == ["set spell!"]
        assert switch.calls == []

    def test_getter_failure_at_confirmation_is_contained(self, widget):
        """A getter that breaks after the picker opened fails only its own row."""
        host = FakeHost()
        available = {"value": True}
        other = Switch()

        def flaky_get():
            if not available["value"]:
                raise RuntimeError("gone")
            return True

        ctx = make_ctx(
            [
                Feature.from_options({"name": "Flaky", "get": flaky_get, "set": ":x"}),
                _switch_feature("Other", other),
            ],
            host,
        )
        picker = FeaturePicker(ctx, widget)
        rows = picker.build_rows()
        available["value"] = False

        results = picker.confirm(rows, None)

        assert [r.ok for r in results] == [False, True]
        assert other.calls == [True]
        assert host.errors() == ["Failed to read state of 'Flaky': gone"]


class TestFormat:
    """Styled segments for a row."""

    def test_segments_for_disabled_row(self, ctx, widget):
        """Icon, name and description get the Off groups."""
        picker = FeaturePicker(ctx, widget)
        spelling = picker.build_rows()[0]

        assert picker.format(spelling, set()) == [
            ("[ ]", "TogglerPickerIconOff"),
            ("  ", None),
            ("Spelling", "TogglerPickerNameOff"),
            (" ", None),
            ("Show a red underline for spelling errors.", "TogglerPickerDescriptionOff"),
        ]

    def test_selected_enabled_row(self, ctx, widget):
        """Marked enabled rows use the OnSelected groups."""
        picker = FeaturePicker(ctx, widget)
        zen = picker.build_rows()[1]

        segments = picker.format(zen, {2})

        assert segments[0] == ("[x]", "TogglerPickerIconOnSelected")
        assert segments[2] == ("Zen Mode", "TogglerPickerNameOnSelected")
        assert segments[4][1] == "TogglerPickerDescriptionOnSelected"

    def test_no_description_segment_when_empty(self, ctx, widget):
        """No trailing space or description segment without a description."""
        picker = FeaturePicker(ctx, widget)
        split = picker.build_rows()[2]

        assert picker.format(split, {1}) == [
            ("[ ]", "TogglerPickerIconOff"),
            ("  ", None),
            ("Split", "TogglerPickerNameOff"),
        ]


class TestOpen:
    """Opening the picker widget."""

    def test_shows_rows_with_callbacks(self, ctx, widget):
        """The widget receives rows, window options and both callbacks."""
        picker = FeaturePicker(ctx, widget)

        picker.open()

        widget.show.assert_called_once()
        rows, window, confirm, fmt = widget.show.call_args.args
        assert [row.name for row in rows] == ["Spelling", "Zen Mode", "Split"]
        assert window is ctx.config.window
        assert confirm == picker.confirm
        assert fmt == picker.format

    def test_warns_when_no_rows(self, widget):
        """With no valid rows a warning is shown instead."""
        host = FakeHost()
        FeaturePicker(make_ctx([], host), widget).open()

        widget.show.assert_not_called()
        assert host.notifications == [("Toggler: No features to show", "warning")]
