"""State/store layer.

This package holds the single in-memory record of the last known device
state. Only the reconciliation engine writes to it; everything else sees
:class:`pytics.models.StatusSnapshot` copies.
"""

from pytics.state.store import DeviceStateStore

__all__ = ["DeviceStateStore"]
