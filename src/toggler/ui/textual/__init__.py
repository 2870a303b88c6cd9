"""Textual picker for Toggler."""

from .picker_modal import FeaturePickerApp, PickerResult, TextualPickerWidget, filter_rows

__all__ = ["FeaturePickerApp", "PickerResult", "TextualPickerWidget", "filter_rows"]
