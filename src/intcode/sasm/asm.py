import logging as lg
from pathlib import Path
from typing import List, Tuple

import click
import pyparsing as pp

from intcode.runtime.program import format_program
from intcode.sasm.fpp import FPP
import intcode.sasm.grammar as grammar


class CompilationItem:
    modulename: str
    contents: str


def collect_file(filepath: str | Path) -> CompilationItem:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    item = CompilationItem()
    item.contents = filepath.read_text()
    item.modulename = filepath.stem
    return item


def compile_items(compile_items: List[CompilationItem]) -> List[int]:
    # First pass
    first_pass = FPP()

    for compile_item in compile_items:
        lg.info(f'Processing {compile_item.modulename}')

        try:
            actions = grammar.program.parse_string(compile_item.contents, parse_all=True)
        except pp.ParseException as e:
            raise UserWarning(f'{compile_item.modulename}: {e}') from e

        for (func, arg) in actions:  # type: ignore
            func(first_pass, arg)

    # Second pass
    words: List[int] = []

    for (t, d) in first_pass.cmd_list:
        if t == 'word':
            words.append(int(d))

        if t == 'ref':
            if d not in first_pass.label_dict:
                raise UserWarning(f'Unknown label {d}')

            words.append(first_pass.label_dict[str(d)])

    return words


def compile_source(contents: str, modulename: str = '<source>') -> List[int]:
    item = CompilationItem()
    item.modulename = modulename
    item.contents = contents
    return compile_items([item])


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.argument('sources', nargs=-1, type=Path)
@click.argument('program', type=Path)
def compile(verbose: bool, sources: Tuple[Path], program: Path):
    lg.basicConfig(level=lg.DEBUG if verbose else lg.INFO)
    lg.info('INTCODE ASM')

    items = [collect_file(path) for path in sources]
    words = compile_items(items)
    program.parent.mkdir(parents=True, exist_ok=True)
    program.write_text(format_program(words) + '\n')


if __name__ == '__main__':
    compile()
