''' Program text: comma-separated signed integers '''

import logging as lg
from pathlib import Path
from typing import Iterable

import pyparsing as pp


word = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: int(r[0]))
program = word + pp.ZeroOrMore(pp.Suppress(',') + word)


def parse_program(text: str) -> list[int]:
    words = program.parse_string(text.strip(), parse_all=True)
    lg.debug(f'Parsed program of {len(words)} words')
    return list(words)


def load_program(path: str | Path) -> list[int]:
    if isinstance(path, str):
        path = Path(path)

    lg.debug(f'Loading program {path}')
    return parse_program(path.read_text())


def format_program(words: Iterable[int]) -> str:
    return ','.join(str(w) for w in words)
