"""
Blob Normalizer
Coerces persisted JSON blob fields (campaign contents, tone profiles, metadata)
into plain Python containers.

The backend stores these fields as free-form text and the same field arrives
either as a JSON string or as an already-decoded structure depending on the
code path. Every decode path here terminates in a concrete container and never
raises.
"""

import json
from dataclasses import dataclass, field


def print_reporter(message, error=None):
    """Default observability sink: prints the failure, like the rest of the app."""
    if error is not None:
        print(f"{message}: {error}")
    else:
        print(message)


class CollectingReporter:
    """
    Reporter that records failures instead of printing them.
    Handy for tests and for surfacing parse warnings in a debug panel.
    Pass `forward` to also hand every report to another reporter.
    """

    def __init__(self, forward=None):
        self.reports = []
        self.forward = forward

    def __call__(self, message, error=None):
        self.reports.append((message, error))
        if self.forward is not None:
            self.forward(message, error)

    @property
    def messages(self):
        return [message for message, _ in self.reports]

    def __len__(self):
        return len(self.reports)


# Tagged view of a raw blob value
@dataclass(frozen=True)
class RawString:
    text: str


@dataclass(frozen=True)
class RawParsed:
    value: object = field(default=None)


@dataclass(frozen=True)
class RawAbsent:
    pass


def tag_raw(value):
    """
    Classify a persisted value.

    Returns:
        RawAbsent for None / empty or whitespace-only strings,
        RawString for any other string, RawParsed for everything else.
    """
    if value is None:
        return RawAbsent()
    if isinstance(value, str):
        if not value.strip():
            return RawAbsent()
        return RawString(value)
    return RawParsed(value)


def _is_sequence(value):
    return isinstance(value, (list, tuple))


def _is_mapping(value):
    return isinstance(value, dict)


SHAPES = {
    "sequence": (_is_sequence, list),
    "mapping": (_is_mapping, dict),
}


def decode_blob(value, shape, reporter=None, label="blob"):
    """
    Decode a persisted blob into the requested container shape.

    Args:
        value: Raw field value (JSON string, decoded structure, None or "")
        shape: "sequence" or "mapping"
        reporter: Callable(message, error=None) receiving decode failures
        label: Field name used in reported messages

    Returns:
        A list for "sequence", a dict for "mapping". Values already in the
        right shape are returned as-is (tuples become lists).
    """
    if shape not in SHAPES:
        raise ValueError(f"Unknown blob shape: {shape}")

    reporter = reporter or print_reporter
    matches, empty = SHAPES[shape]
    raw = tag_raw(value)

    if isinstance(raw, RawAbsent):
        return empty()

    if isinstance(raw, RawParsed):
        if matches(raw.value):
            return list(raw.value) if isinstance(raw.value, tuple) else raw.value
        reporter(f"Unexpected {label} shape (expected {shape})", type(raw.value).__name__)
        return empty()

    try:
        decoded = json.loads(raw.text)
    except (ValueError, TypeError, RecursionError) as e:
        reporter(f"Error parsing {label}", e)
        return empty()

    if matches(decoded):
        return decoded

    reporter(f"Unexpected {label} shape (expected {shape})", type(decoded).__name__)
    return empty()


def decode_sequence(value, reporter=None, label="sequence"):
    """Decode a blob that should hold a JSON array. Always returns a list."""
    return decode_blob(value, "sequence", reporter=reporter, label=label)


def decode_mapping(value, reporter=None, label="mapping"):
    """Decode a blob that should hold a JSON object. Always returns a dict."""
    return decode_blob(value, "mapping", reporter=reporter, label=label)
