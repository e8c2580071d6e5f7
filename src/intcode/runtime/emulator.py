import sys
from pathlib import Path
import logging as lg
import traceback
from typing import Callable, Iterable

import click

from intcode.common.settings import MachineSettings
from intcode.runtime.program import load_program
import intcode.runtime.cpu as cpu


EXIT_HALT = 0
EXIT_WAITING = 1
EXIT_FAULT = 2
EXIT_KEYBOARD = 3
EXIT_STEP_LIMIT = 4
EXIT_EXEC_ERROR = 100


def execute(
    program: Iterable[int],
    inputs: Iterable[int] = (),
    settings: MachineSettings | None = None,
    input_source: Callable[[], int] | None = None
) -> cpu.Machine:
    machine = cpu.Machine(program, settings)
    machine.set_inputs(inputs)
    machine.run()

    # Without a source the caller gets the machine back still waiting
    while machine.is_suspended_on_input() and input_source is not None:
        machine.add_input(input_source())
        machine.resume()

    return machine


def exit_code(machine: cpu.Machine) -> int:
    if machine.is_halted():
        lg.info('Execution halted gracefully')
        return EXIT_HALT

    if machine.is_suspended_on_input():
        lg.info(f'Execution stopped waiting for input at {machine.pc}')
        return EXIT_WAITING

    lg.info(f'Execution halted on fault: {machine.fault}')
    return EXIT_FAULT


def prompt_input() -> int:
    return click.prompt('input', type=int, err=True)


@click.command()
@click.option('-v', '--verbose', is_flag=True, help='Sets logging level to debug')
@click.option('-i', '--input', 'inputs', type=int, multiple=True, help='Queue an input value')
@click.option('--interactive', is_flag=True, help='Prompt for input when the machine waits')
@click.option('--max-steps', type=int, help='Stop after this many instructions')
@click.option('--lenient-modes', is_flag=True, help='Treat unknown parameter modes as positional')
@click.option('--trace', is_flag=True, help='Dump machine state after every instruction')
@click.option('-c', '--config', type=click.Path(exists=True, path_type=Path))
@click.argument('program_filename', type=Path)
def run(
    verbose: bool,
    inputs: tuple[int, ...],
    interactive: bool,
    max_steps: int | None,
    lenient_modes: bool,
    trace: bool,
    config: Path | None,
    program_filename: Path
):
    lg.basicConfig(level=lg.DEBUG if verbose or trace else lg.INFO)
    lg.info('INTCODE')

    try:
        settings = MachineSettings.from_toml(config) if config else MachineSettings()
        settings.update(
            step_limit=max_steps,
            strict_modes=False if lenient_modes else None,
            trace=True if trace else None
        )

        program = load_program(program_filename)
        machine = execute(
            program,
            inputs,
            settings,
            prompt_input if interactive else None
        )

        for value in machine.outputs():
            click.echo(value)

        sys.exit(exit_code(machine))

    except cpu.StepLimitExceeded as e:
        lg.info(f'Execution stopped: {e}')
        sys.exit(EXIT_STEP_LIMIT)

    except (KeyboardInterrupt, click.Abort):
        lg.info('Execution halted by the user')
        sys.exit(EXIT_KEYBOARD)

    except Exception as e:
        lg.info(f'Execution halted on general error {e}')
        traceback.print_exc()
        sys.exit(EXIT_EXEC_ERROR)


if __name__ == '__main__':
    run()
