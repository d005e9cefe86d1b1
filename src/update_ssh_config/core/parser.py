from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .model import ParsedBlock
from .util import split_words


class HostNotFoundError(ValueError):
    def __init__(self, host_alias: str):
        super().__init__(f"Host {host_alias} not found in config file.")
        self.host_alias = host_alias


class Mode(Enum):
    BEFORE = "before"
    MATCHING = "matching"
    AFTER = "after"


# Token classes a line is reduced to before looking up its transition
BLANK = "<blank>"
OTHER = "<other>"
HOST = "Host"
MATCH = "Match"

FIELD_KEYWORDS = {
    "HostName": "hostname",
    "User": "user",
    "IdentityFile": "identity_file",
}

Action = Callable[[Mode, ParsedBlock, List[str], str], Mode]


def _classify(words: List[str]) -> str:
    if not words:
        return BLANK
    if words[0] in (HOST, MATCH) or words[0] in FIELD_KEYWORDS:
        return words[0]
    return OTHER


def _passthrough(mode: Mode, parsed: ParsedBlock, words: List[str], line: str) -> Mode:
    if mode is Mode.BEFORE:
        parsed.before.append(line)
    else:
        parsed.after.append(line)
    return mode


def _open_block(mode: Mode, parsed: ParsedBlock, words: List[str], line: str) -> Mode:
    if len(words) > 1 and words[1] == parsed.host_alias:
        return Mode.MATCHING
    return _passthrough(mode, parsed, words, line)


def _close_block(mode: Mode, parsed: ParsedBlock, words: List[str], line: str) -> Mode:
    # The terminating line belongs to the rest of the file
    parsed.after.append(line)
    return Mode.AFTER


def _set_field(mode: Mode, parsed: ParsedBlock, words: List[str], line: str) -> Mode:
    value = words[1] if len(words) > 1 else ""
    setattr(parsed, FIELD_KEYWORDS[words[0]], value)
    return mode


def _collect_extra(mode: Mode, parsed: ParsedBlock, words: List[str], line: str) -> Mode:
    parsed.extra_options.append(line)
    return mode


# Anything not listed here is passed through to before/after unchanged.
TRANSITIONS: Dict[Tuple[Mode, str], Action] = {
    (Mode.BEFORE, HOST): _open_block,
    (Mode.MATCHING, HOST): _close_block,
    (Mode.MATCHING, MATCH): _close_block,
    (Mode.MATCHING, BLANK): _close_block,
    (Mode.MATCHING, "HostName"): _set_field,
    (Mode.MATCHING, "User"): _set_field,
    (Mode.MATCHING, "IdentityFile"): _set_field,
    (Mode.MATCHING, OTHER): _collect_extra,
}


def split_lines_on_host(lines: Iterable[str], host_alias: str) -> ParsedBlock:
    """Split config lines around the first ``Host <host_alias>`` block.

    The matched ``Host`` line and its HostName/User/IdentityFile directives
    are lifted into the returned ParsedBlock; every other line ends up in
    ``before`` or ``after`` untouched, except unrecognized directives inside
    the block, which go to ``extra_options``. The line that ends the block
    (blank line, next ``Host`` or ``Match`` line) is the first entry of ``after``.

    Raises HostNotFoundError if no block matches.
    """
    mode = Mode.BEFORE
    parsed = ParsedBlock(host_alias=host_alias)
    for line in lines:
        words = split_words(line)
        action: Optional[Action] = TRANSITIONS.get((mode, _classify(words)))
        mode = (action or _passthrough)(mode, parsed, words, line)
    if mode is Mode.BEFORE:
        raise HostNotFoundError(host_alias)
    return parsed


def render(parsed: ParsedBlock, keep_extra: bool = False) -> List[str]:
    """Reassemble the file: before, the rewritten block, after."""
    return [*parsed.before, *parsed.block_lines(keep_extra=keep_extra), *parsed.after]
