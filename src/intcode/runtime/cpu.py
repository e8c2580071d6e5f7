import logging as lg
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import intcode.common.ops as ops
from intcode.common.settings import MachineSettings
from intcode.runtime.faults import MachineFault, ModeFault, OpcodeFault
from intcode.runtime.memory import Memory
from intcode.runtime.program import parse_program


class State(Enum):
    RUNNABLE = 'runnable'
    HALTED = 'halted'
    WAITING = 'waiting'     # Suspended on input
    FAULTED = 'faulted'


class StepLimitExceeded(Exception):
    def __init__(self, steps: int):
        super().__init__(f'Step limit of {steps} instructions exceeded')
        self.steps = steps


@dataclass(frozen=True)
class Instruction:
    address: int
    opcode: int
    modes: tuple[int, int]  # Modes of P1 and P2, P3 is always a write target


def decode(address: int, word: int) -> Instruction:
    if word < 0:
        raise OpcodeFault(address, word)

    return Instruction(
        address=address,
        opcode=word % 100,
        modes=((word // 100) % 10, (word // 1000) % 10)
    )


class Machine():
    memory: Memory
    pc: int                 # Program counter
    state: State
    steps: int              # Instructions executed since reset
    fault: MachineFault | None
    input_queue: deque[int]
    output_queue: list[int]

    def __init__(self, memory: Iterable[int], settings: MachineSettings | None = None):
        self.settings = settings if settings is not None else MachineSettings()
        self.input_queue = deque()
        self.load(memory)

    @classmethod
    def from_text(cls, text: str, settings: MachineSettings | None = None) -> 'Machine':
        return cls(parse_program(text), settings)

    def load(self, memory: Iterable[int]):
        self.memory = Memory(memory)
        self.pc = 0
        self.state = State.RUNNABLE
        self.steps = 0
        self.fault = None
        self.output_queue = []

    # - I/O - #

    def set_inputs(self, values: Iterable[int]):
        self.input_queue = deque(values)

    def add_input(self, value: int):
        self.input_queue.append(value)

    def pending_inputs(self) -> tuple[int, ...]:
        return tuple(self.input_queue)

    def outputs(self) -> tuple[int, ...]:
        return tuple(self.output_queue)

    # - State - #

    def is_halted(self) -> bool:
        return self.state is State.HALTED

    def is_suspended_on_input(self) -> bool:
        return self.state is State.WAITING

    def is_faulted(self) -> bool:
        return self.state is State.FAULTED

    def snapshot(self) -> list[int]:
        return self.memory.snapshot()

    def reset_memory(self, memory: Iterable[int]):
        # Pending inputs survive a reset
        self.load(memory)

    # - Helpers - #

    def debug_dump(self):
        state = [f'{k}:{v}' for k, v in {
            'PC': self.pc,
            'ST': self.state.name,
            'IN': len(self.input_queue),
            'OUT': len(self.output_queue)
        }.items()]

        lg.debug(' '.join(state))

    def param(self, instr: Instruction, n: int) -> int:
        return self.memory[instr.address + n]

    def resolve(self, raw: int, mode: int) -> int:
        if mode == ops.IMMEDIATE:
            return raw

        if mode != ops.POSITIONAL and self.settings.strict_modes:
            raise ModeFault(self.pc, mode)

        return self.memory[raw]

    def read(self, instr: Instruction, n: int) -> int:
        return self.resolve(self.param(instr, n), instr.modes[n - 1])

    def write(self, instr: Instruction, n: int, value: int):
        self.memory[self.param(instr, n)] = value

    def arithm_pair(self, instr: Instruction, op: Callable[[int, int], int]) -> int:
        a = self.read(instr, 1)
        b = self.read(instr, 2)
        self.write(instr, 3, op(a, b))
        return instr.address + ops.size(instr.opcode)

    def jump_if(self, instr: Instruction, cond: Callable[[int], bool]) -> int:
        if cond(self.read(instr, 1)):
            return self.read(instr, 2)

        return instr.address + ops.size(instr.opcode)

    # - Operations - #
    # Each handler returns the next program counter

    def add(self, instr: Instruction) -> int:
        return self.arithm_pair(instr, lambda a, b: a + b)

    def mul(self, instr: Instruction) -> int:
        return self.arithm_pair(instr, lambda a, b: a * b)

    def inp(self, instr: Instruction) -> int:
        if not self.input_queue:
            lg.debug(f'Waiting for input at {instr.address}')
            self.state = State.WAITING
            return instr.address

        dst = self.param(instr, 1)
        self.memory.check(dst)
        self.memory[dst] = self.input_queue.popleft()
        return instr.address + ops.size(ops.INP)

    def out(self, instr: Instruction) -> int:
        self.output_queue.append(self.read(instr, 1))
        return instr.address + ops.size(ops.OUT)

    def jt(self, instr: Instruction) -> int:
        return self.jump_if(instr, lambda v: v != 0)

    def jf(self, instr: Instruction) -> int:
        return self.jump_if(instr, lambda v: v == 0)

    def lt(self, instr: Instruction) -> int:
        return self.arithm_pair(instr, lambda a, b: int(a < b))

    def eq(self, instr: Instruction) -> int:
        return self.arithm_pair(instr, lambda a, b: int(a == b))

    def hlt(self, instr: Instruction) -> int:
        lg.debug(f'Halted at {instr.address}')
        self.state = State.HALTED
        return instr.address

    HANDLERS = {
        ops.ADD: add,
        ops.MUL: mul,
        ops.INP: inp,
        ops.OUT: out,
        ops.JT: jt,
        ops.JF: jf,
        ops.LT: lt,
        ops.EQ: eq,
        ops.HLT: hlt
    }

    # -- Implementation -- #

    def exec_next(self):
        try:
            instr = decode(self.pc, self.memory[self.pc])
            handler = self.HANDLERS.get(instr.opcode)

            if handler is None:
                raise OpcodeFault(self.pc, self.memory[self.pc])

            self.pc = handler(self, instr)

        except MachineFault as e:
            if e.pc is None:
                e.pc = self.pc

            lg.debug(f'Fault: {e}')
            self.fault = e
            self.state = State.FAULTED

        if self.state is not State.WAITING:
            self.steps += 1

        if self.settings.trace:
            self.debug_dump()

    def run(self):
        executed = 0
        limit = self.settings.step_limit

        while self.state is State.RUNNABLE:
            if limit is not None and executed >= limit:
                raise StepLimitExceeded(limit)

            self.exec_next()
            executed += 1

    def resume(self):
        if self.state in (State.HALTED, State.FAULTED):
            lg.debug(f'Resume ignored, machine is {self.state.name}')
            return

        self.state = State.RUNNABLE
        self.run()
