"""Aggregation primitives shared by every report.

Each report is written as a short chain of these steps:
match -> join -> group -> project -> sort. They work on plain in-memory
records, perform no I/O and never mutate their inputs, so a report built from
the same snapshot twice yields the same rows.

Joins return ``(left, right)`` pairs. Groups come back in the order their key
was first seen; ``First`` and ``Push`` therefore follow the arrival order of the
input, everything else is order independent.
"""

import datetime
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")

_MISSING = object()


def as_utc(value: datetime.datetime) -> datetime.datetime:
    """Normalise a timestamp to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def day_bucket(value: datetime.datetime) -> str:
    return as_utc(value).strftime("%Y-%m-%d")


def month_bucket(value: datetime.datetime) -> str:
    return as_utc(value).strftime("%Y-%m")


def match(records: Iterable[T], predicate: Callable[[T], bool]) -> List[T]:
    return [record for record in records if predicate(record)]


def _index(records: Iterable[R], key: Callable[[R], Hashable]) -> Dict[Hashable, List[R]]:
    index: Dict[Hashable, List[R]] = {}
    for record in records:
        index.setdefault(key(record), []).append(record)
    return index


def join_many(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Hashable],
    right_key: Callable[[R], Hashable],
) -> List[Tuple[L, List[R]]]:
    """One-to-many join on a scalar foreign key.

    Every left record is kept; its matches are listed in the right collection's
    order and may be empty. A ``None`` key never matches.
    """
    index = _index(right, right_key)
    joined = []
    for record in left:
        key = left_key(record)
        matches = index.get(key, []) if key is not None else []
        joined.append((record, list(matches)))
    return joined


def join_many_by_refs(
    left: Iterable[L],
    right: Iterable[R],
    left_refs: Callable[[L], Iterable[Hashable]],
    right_key: Callable[[R], Hashable],
) -> List[Tuple[L, List[R]]]:
    """One-to-many join where the left record stores an array of foreign keys.

    Matches come back in the right collection's order, each at most once, so a
    repeated reference does not duplicate a record. References with no
    counterpart are skipped.
    """
    # key -> [(position in right, record)]
    index = _index(enumerate(right), lambda pair: right_key(pair[1]))
    joined = []
    for record in left:
        refs = {ref for ref in (left_refs(record) or ()) if ref is not None}
        found = [pair for ref in refs for pair in index.get(ref, ())]
        found.sort(key=lambda pair: pair[0])
        joined.append((record, [candidate for _, candidate in found]))
    return joined


def join_one(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Hashable],
    right_key: Callable[[R], Hashable],
) -> List[Tuple[L, Optional[R]]]:
    """Left join keeping only the first match; unmatched records pair with None."""
    return [
        (record, matches[0] if matches else None)
        for record, matches in join_many(left, right, left_key, right_key)
    ]


def inner_join_one(
    left: Iterable[L],
    right: Iterable[R],
    left_key: Callable[[L], Hashable],
    right_key: Callable[[R], Hashable],
) -> List[Tuple[L, R]]:
    """Like ``join_one`` but records without a match are dropped."""
    return [
        (record, match_)
        for record, match_ in join_one(left, right, left_key, right_key)
        if match_ is not None
    ]


def unwind(joined: Iterable[Tuple[L, Sequence[R]]]) -> List[Tuple[L, R]]:
    """Flatten one-to-many join output into one pair per right record."""
    return [(record, match_) for record, matches in joined for match_ in matches]


class Accumulator:
    """Fold applied to every record of a group."""

    def __init__(self, value: Optional[Callable[[Any], Any]] = None):
        self.value = value

    def start(self) -> Any:
        raise NotImplementedError

    def add(self, state: Any, record: Any) -> Any:
        raise NotImplementedError

    def result(self, state: Any) -> Any:
        return state


class Sum(Accumulator):
    """Sum of ``value(record)``; ``None`` values are ignored."""

    def start(self):
        return 0

    def add(self, state, record):
        amount = self.value(record)
        return state if amount is None else state + amount


class Count(Accumulator):
    def start(self):
        return 0

    def add(self, state, record):
        return state + 1


class Max(Accumulator):
    def start(self):
        return None

    def add(self, state, record):
        candidate = self.value(record)
        if candidate is None:
            return state
        if state is None or candidate > state:
            return candidate
        return state


class First(Accumulator):
    """Value of the first record seen. Order sensitive."""

    def start(self):
        return _MISSING

    def add(self, state, record):
        return self.value(record) if state is _MISSING else state

    def result(self, state):
        return None if state is _MISSING else state


class Push(Accumulator):
    """Collects ``value(record)`` in arrival order. Order sensitive."""

    def start(self):
        return []

    def add(self, state, record):
        state.append(self.value(record))
        return state


@dataclass
class Group:
    key: Any
    values: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.values[name]


def group_by(
    records: Iterable[T],
    key: Callable[[T], Hashable],
    **accumulators: Accumulator,
) -> List[Group]:
    """Partition ``records`` by ``key`` and fold every accumulator per partition."""
    states: Dict[Hashable, Dict[str, Any]] = {}
    for record in records:
        group_key = key(record)
        group_state = states.get(group_key)
        if group_state is None:
            group_state = {name: acc.start() for name, acc in accumulators.items()}
            states[group_key] = group_state
        for name, acc in accumulators.items():
            group_state[name] = acc.add(group_state[name], record)

    return [
        Group(
            key=group_key,
            values={name: accumulators[name].result(state) for name, state in group_state.items()},
        )
        for group_key, group_state in states.items()
    ]


def sort_by(rows: Iterable[T], key: Callable[[T], Any], descending: bool = False) -> List[T]:
    """Stable sort; rows with equal keys keep their incoming order."""
    return sorted(rows, key=key, reverse=descending)
