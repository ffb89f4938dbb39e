"""Provide utility helpers for madqc.

Modules include logging helpers, diagnostics summaries, and small statistical
routines that are reused by the detectors.

See Also:
    madqc.utils.stats: Statistical helpers.
    madqc.utils.diagnostics: Summary utilities for detector outputs.
"""
