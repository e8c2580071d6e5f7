# type: ignore
''' Assembler grammar '''

import pyparsing as pp

import intcode.common.ops as ops
from intcode.sasm.fpp import FPP, Operand


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Suppress(pp.Literal('//') + pp.SkipTo(pp.LineEnd()))
sep = pp.Optional(pp.Suppress(','))

label = (id + pp.Suppress(':')).set_parse_action(lambda r: (FPP.on_label, r[0]))

s_dec_const = pp.Regex('[+-]?[0-9]+').set_parse_action(lambda r: int(r[0]))
ref = (pp.Suppress('&') + id).set_parse_action(lambda r: str(r[0]))

# Either a number or a label name
address = s_dec_const | ref

positional = address.copy().set_parse_action(lambda r: Operand(ops.POSITIONAL, r[0]))
immediate = (pp.Suppress('#') + address).set_parse_action(lambda r: Operand(ops.IMMEDIATE, r[0]))
operand = immediate | positional


def g_cmd(literal: str, op: int):
    expr = pp.Keyword(literal)

    for _ in range(ops.ARITY[op]):
        expr = expr + operand + sep

    return expr.set_parse_action(lambda r: (FPP.on_instr, (op, list(r[1:]))))


data_cmd = (pp.Keyword('data') + pp.OneOrMore(address + sep)) \
    .set_parse_action(lambda r: (FPP.on_data, list(r[1:])))

asm_cmd = pp.MatchFirst([g_cmd(literal, op) for literal, op in ops.MNEMONICS.items()]) \
    | data_cmd

program = pp.ZeroOrMore(label | asm_cmd)
program.ignore(comment)
