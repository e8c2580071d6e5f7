# Opcodes
ADD = 1   # P1 +  P2 -> [P3]
MUL = 2   # P1 *  P2 -> [P3]
INP = 3   # input -> [P1]
OUT = 4   # P1 -> output
JT = 5    # if P1 .ne 0 jmp P2
JF = 6    # if P1 .eq 0 jmp P2
LT = 7    # P1 .lt P2 -> [P3]
EQ = 8    # P1 .eq P2 -> [P3]
HLT = 99

# Parameter modes
POSITIONAL = 0
IMMEDIATE = 1

MODES = (POSITIONAL, IMMEDIATE)

# Number of parameters following the instruction word
ARITY = {
    ADD: 3,
    MUL: 3,
    INP: 1,
    OUT: 1,
    JT: 2,
    JF: 2,
    LT: 3,
    EQ: 3,
    HLT: 0
}

# Parameters written to, 1-based
WRITE_TARGETS = {
    ADD: 3,
    MUL: 3,
    INP: 1,
    LT: 3,
    EQ: 3
}

MNEMONICS = {
    'add': ADD,
    'mul': MUL,
    'in': INP,
    'out': OUT,
    'jt': JT,
    'jf': JF,
    'lt': LT,
    'eq': EQ,
    'hlt': HLT
}


def size(op: int) -> int:
    return ARITY[op] + 1
