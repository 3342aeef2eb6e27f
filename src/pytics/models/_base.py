"""Shared enum base for device signal states.

State enums inherit from :class:`TicsEnum` which requires an ``UNKNOWN``
member at ``-1`` and adds a ``_missing_`` hook that returns ``UNKNOWN``
for any value without a mapped member.
"""

from __future__ import annotations

import enum


class TicsEnum(enum.IntEnum):
    """Base for device state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    Values without a mapped member resolve to ``UNKNOWN`` instead of
    raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> TicsEnum:
        if hasattr(cls, "UNKNOWN"):
            unknown: TicsEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))

    @property
    def is_known(self) -> bool:
        return self.value != -1
