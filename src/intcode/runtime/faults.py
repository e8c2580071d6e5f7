class MachineFault(Exception):
    ''' Stops the machine, the loop records it and moves to FAULTED '''
    pc: int | None  # Attached by the loop when raised below the CPU

    def __init__(self, message: str, pc: int | None = None):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self) -> str:
        if self.pc is None:
            return self.message

        return f'{self.message} (pc={self.pc})'


class MemoryFault(MachineFault):
    def __init__(self, address: int, size: int):
        super().__init__(f'Address {address} outside of memory [0, {size})')
        self.address = address


class ModeFault(MachineFault):
    def __init__(self, pc: int, mode: int):
        super().__init__(f'Unknown parameter mode {mode}', pc)
        self.mode = mode


class OpcodeFault(MachineFault):
    def __init__(self, pc: int, word: int):
        super().__init__(f'Unknown instruction {word}', pc)
        self.word = word
