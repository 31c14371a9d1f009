"""Indifferent-access records: every key is canonicalized to ``str`` before anything else."""

from __future__ import annotations

from typing import ClassVar

from superdict.keys import IndifferentKeys, KeyNormalizer
from superdict.record import SuperDict


class IndifferentSuperDict(SuperDict, abstract=True):
    """``SuperDict`` whose keys may be given as ``str``, ``Enum``, ``bytes`` or anything ``str()`` accepts.

    Attributes must be declared with ``str`` keys. Nested mappings are stored
    as ``IndifferentDict`` so the whole structure shares the same key form.
    """

    key_normalizer: ClassVar[KeyNormalizer] = IndifferentKeys()


__all__ = ["IndifferentSuperDict"]
