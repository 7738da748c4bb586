"""Resolve physical key labels against capture-side key names."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)

CandidateGenerator = Callable[[str], Iterable[str]]


def _exact(label: str) -> Iterator[str]:
    yield label


def _upper(label: str) -> Iterator[str]:
    yield label.upper()


def _lower(label: str) -> Iterator[str]:
    yield label.lower()


def _title(label: str) -> Iterator[str]:
    # Not str.title(), which also raises letters after digits ("f1x" -> "F1X").
    yield label[:1].upper() + label[1:].lower()


def _key_prefixed(label: str) -> Iterator[str]:
    """Single-character labels map onto the ``Key<LETTER>`` capture convention."""
    if len(label) == 1:
        yield f"Key{label.upper()}"


# Tried in order; first name present in the mapping wins.
CANDIDATE_GENERATORS: tuple[CandidateGenerator, ...] = (
    _exact,
    _upper,
    _lower,
    _title,
    _key_prefixed,
)


def candidate_names(
    label: str,
    generators: Iterable[CandidateGenerator] = CANDIDATE_GENERATORS,
) -> list[str]:
    """Return the ordered, de-duplicated names tried for *label*."""
    seen: set[str] = set()
    names: list[str] = []
    for generator in generators:
        for name in generator(label):
            if name not in seen:
                seen.add(name)
                names.append(name)
    return names


def resolve(
    label: str,
    frequencies: Mapping[str, int],
    generators: Iterable[CandidateGenerator] = CANDIDATE_GENERATORS,
) -> int:
    """Return the press count *frequencies* records for the physical key *label*.

    Falls back to 0 when no spelling of the label is present; a key that was
    never pressed is a normal state, not an error.
    """
    for generator in generators:
        for name in generator(label):
            count = frequencies.get(name)
            if count is not None:
                if name != label:
                    logger.debug("Resolved key %r via %r", label, name)
                return count
    return 0
