import logging as lg
from dataclasses import dataclass
from typing import List, Tuple, Dict

import intcode.common.ops as ops


@dataclass(frozen=True)
class Operand:
    mode: int
    target: int | str   # Constant or label name


class FPP:
    ''' First pass processor '''
    cmd_list: List[Tuple[str, int | str]]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.label_dict = dict()

    # Handlers
    def issue_word(self, word: int):
        self.cmd_list.append(('word', word))
        self.offset += 1

    def issue_ref(self, labelname: str):
        lg.debug(f'Ref {labelname}')
        self.cmd_list.append(('ref', labelname))
        self.offset += 1    # placeholder-word

    def issue_value(self, value: int | str):
        if isinstance(value, str):
            self.issue_ref(value)
        else:
            self.issue_word(value)

    def on_label(self, labelname: str):
        if labelname in self.label_dict:
            raise UserWarning(f'Label {labelname} defined twice')

        self.label_dict[labelname] = self.offset
        lg.debug(f'Label {labelname} @ {self.offset}')

    def on_instr(self, instr: Tuple[int, List[Operand]]):
        (op, operands) = instr
        word = op

        for i, operand in enumerate(operands):
            if ops.WRITE_TARGETS.get(op) == i + 1:
                if operand.mode != ops.POSITIONAL:
                    raise UserWarning(f'Write target of {op} must be positional')
            else:
                word += operand.mode * 10 ** (i + 2)

        lg.debug(f'Issuing command {word}')
        self.issue_word(word)

        for operand in operands:
            self.issue_value(operand.target)

    def on_data(self, values: List[int | str]):
        for value in values:
            self.issue_value(value)
