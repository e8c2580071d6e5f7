from pathlib import Path
import tomllib


class MachineSettings:
    step_limit: int | None  # Instructions per run() call, None is unbounded
    strict_modes: bool      # Fault on unknown parameter modes
    trace: bool             # Dump machine state after every instruction

    def __init__(self):
        self.step_limit = None
        self.strict_modes = True
        self.trace = False

    def update(
        self,
        step_limit: int | None = None,
        strict_modes: bool | None = None,
        trace: bool | None = None
    ):
        if step_limit is not None:
            if not isinstance(step_limit, int) or step_limit <= 0:
                raise UserWarning(f'Step limit must be a positive integer, got {step_limit!r}')

            self.step_limit = step_limit

        if strict_modes is not None:
            self.strict_modes = strict_modes

        if trace is not None:
            self.trace = trace

        return self

    @staticmethod
    def from_toml(path: str | Path) -> 'MachineSettings':
        if isinstance(path, str):
            path = Path(path)

        config = tomllib.loads(path.read_text())
        machine = config.get('machine', {})

        return MachineSettings().update(
            step_limit=machine.get('step_limit'),
            strict_modes=machine.get('strict_modes'),
            trace=machine.get('trace')
        )
