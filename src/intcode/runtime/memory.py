from typing import Iterable

from intcode.runtime.faults import MemoryFault


class Memory:
    ''' Fixed-size integer memory, every access is bounds-checked '''
    cells: list[int]

    def __init__(self, values: Iterable[int]):
        self.cells = list(values)

    def __len__(self) -> int:
        return len(self.cells)

    def check(self, address: int):
        if address < 0 or address >= len(self):
            raise MemoryFault(address, len(self))

    def __getitem__(self, address: int) -> int:
        self.check(address)
        return self.cells[address]

    def __setitem__(self, address: int, value: int):
        self.check(address)
        self.cells[address] = value

    def snapshot(self) -> list[int]:
        return list(self.cells)
