"""Ordered-rule tokenizer.

Rules are tried in declaration order and the first one matching at the current
position wins, even when a later rule would match a longer substring. Grammars
must therefore declare specific rules (keywords) before generic ones
(identifiers).

Example::

    rules = (
        RuleSet()
        .ignore(r"\\s+")
        .keyword("if")
        .token(r"[a-z]+", "IDENT")
        .tokens(r"(\\d+)\\.(\\d+)", "MAJOR", "MINOR")
    )
    tokenizer = Tokenizer("if abc 1.2", rules)
    tokenizer.next_token()  # Token(value='if', name='if')
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterator, List, NamedTuple, Pattern, Tuple
import logging
import re

from .errors import RuleArityError, UnexpectedInputError

logger = logging.getLogger(__name__)

SKIP = "SKIP"
"""Token name of rules whose matches are discarded."""


class Token(NamedTuple):
    value: str | bool
    name: str | bool


EOS = Token(False, False)
"""End-of-stream sentinel, returned once the input is exhausted."""


@dataclass(frozen=True, slots=True)
class TokenRule:
    pattern: Pattern[str]
    names: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.names:
            raise RuleArityError(f"Rule `{self.pattern.pattern}` declares no token name.")
        if self.is_skip:
            return
        groups = self.pattern.groups
        if groups == 0 and len(self.names) != 1:
            raise RuleArityError(
                f"Only one token (not `{len(self.names)}`) should be provided "
                f"for rule `{self.pattern.pattern}`."
            )
        if groups and groups != len(self.names):
            raise RuleArityError(
                f"You need to provide `{groups}` tokens, instead of `{len(self.names)}` "
                f"for rule `{self.pattern.pattern}`."
            )

    @property
    def is_skip(self) -> bool:
        return self.names == (SKIP,)

    def emit(self, match: re.Match[str]) -> List[Token]:
        if self.is_skip:
            return []
        if not self.pattern.groups:
            return [Token(match.group(0), self.names[0])]
        return [Token(capture or "", name) for name, capture in zip(self.names, match.groups())]


def _compile(pattern: str | Pattern[str]) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


@dataclass(slots=True)
class RuleSet:
    """Ordered collection of lexical rules; builder methods return ``self``."""

    rules: List[TokenRule] = field(default_factory=list)

    def ignore(self, pattern: str | Pattern[str]) -> "RuleSet":
        self.rules.append(TokenRule(_compile(pattern), (SKIP,)))
        return self

    def tokens(self, pattern: str | Pattern[str], *names: str) -> "RuleSet":
        self.rules.append(TokenRule(_compile(pattern), tuple(names)))
        return self

    def token(self, pattern: str | Pattern[str], name: str) -> "RuleSet":
        return self.tokens(pattern, name)

    def keyword(self, name: str) -> "RuleSet":
        """Match ``name`` literally and use it as the token name."""
        return self.token(re.compile(re.escape(name)), name)

    def __iter__(self) -> Iterator[TokenRule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


class Tokenizer:
    """Pull-based tokenizer over an immutable input string.

    Tokens are scanned in batches of at most ``batch_size`` rule matches; the
    buffer is refilled only once it has been drained.
    """

    def __init__(self, text: str, rules: RuleSet, *, batch_size: int | None = None) -> None:
        if batch_size is not None and batch_size < 1:
            raise ValueError("batch_size must be a positive integer")
        self.text = text
        self.rules = rules
        self.batch_size = batch_size
        self.position = 0
        self._buffer: Deque[Token] = deque()

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    def next_token(self) -> Token:
        while not self._buffer:
            self._fill_buffer()
        token = self._buffer.popleft()
        if token == EOS:
            # Keep handing out the sentinel on every later call.
            self._buffer.append(EOS)
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token == EOS:
                return
            yield token

    def _fill_buffer(self) -> None:
        scanned = 0
        while not self.at_end:
            if self.batch_size is not None and scanned >= self.batch_size:
                return
            self._buffer.extend(self._scan())
            scanned += 1
        self._buffer.append(EOS)
        logger.debug("Tokenized %d characters", len(self.text))

    def _scan(self) -> List[Token]:
        for rule in self.rules:
            match = rule.pattern.match(self.text, self.position)
            # Empty matches would never advance the cursor.
            if match is None or match.end() == self.position:
                continue
            self.position = match.end()
            return rule.emit(match)
        raise UnexpectedInputError(self.text, self.position)


__all__ = ["EOS", "RuleSet", "SKIP", "Token", "TokenRule", "Tokenizer"]
