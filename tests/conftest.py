"""Shared pytest fixtures for prompt quality tests."""

import pytest
import tiktoken

from prompt_quality import scoring


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def estimated_tokens(monkeypatch):
    """Use the character-based token estimate instead of loading an encoding."""
    monkeypatch.setattr(scoring, "_tokenizer", lambda: None)


def byte_encoding() -> tiktoken.Encoding:
    """Offline encoding with one token per byte and a single special token."""
    return tiktoken.Encoding(
        name="bytes",
        pat_str=r"\S+|\s+",
        mergeable_ranks={bytes([i]): i for i in range(256)},
        special_tokens={"<|endoftext|>": 256},
    )


@pytest.fixture
def byte_tokenizer(monkeypatch):
    """Count tokens with a real tiktoken encoding that needs no download."""
    encoding = byte_encoding()
    monkeypatch.setattr(scoring, "_tokenizer", lambda: encoding)
    return encoding
