"""Mixin classes for liquid components.

Available Mixins:
- DiagnosticsMixin: Weight, spike and trace statistics for get_diagnostics()
"""

from astroliquid.mixins.diagnostics_mixin import DiagnosticsMixin

__all__ = [
    'DiagnosticsMixin',
]
