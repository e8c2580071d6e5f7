import pytest
from click.testing import CliRunner

import intcode.runtime.emulator as emulator
import intcode.sasm.asm as asm

from unit_utils import find_file
from fixtures import compare_with_8  # noqa: F401


EQUALS_8 = [3, 9, 8, 9, 10, 9, 4, 9, 99, -1, 8]


def test_execute(compare_with_8):  # noqa: F811
    machine = emulator.execute(compare_with_8, [8])

    assert machine.is_halted()
    assert machine.outputs() == (1000,)


def test_execute_pulls_input_when_waiting():
    requests = []

    def source() -> int:
        requests.append(True)
        return 8

    machine = emulator.execute(EQUALS_8, input_source=source)

    assert machine.is_halted()
    assert machine.outputs() == (1,)
    assert len(requests) == 1


def test_execute_returns_waiting_machine():
    machine = emulator.execute(EQUALS_8)

    assert machine.is_suspended_on_input()
    assert emulator.exit_code(machine) == emulator.EXIT_WAITING


def write_program(tmp_path, text: str):
    path = tmp_path / 'program.intcode'
    path.write_text(text)
    return str(path)


def test_cli_halt():
    path = str(find_file('testdata/compare8.intcode'))
    result = CliRunner().invoke(emulator.run, [path, '-i', '9'])

    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '1001\n'


def test_cli_multiple_outputs(tmp_path):
    path = write_program(tmp_path, '104,1,104,-2,99')
    result = CliRunner().invoke(emulator.run, [path])

    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '1\n-2\n'


def test_cli_waiting(tmp_path):
    path = write_program(tmp_path, '3,9,8,9,10,9,4,9,99,-1,8')
    result = CliRunner().invoke(emulator.run, [path])

    assert result.exit_code == emulator.EXIT_WAITING
    assert result.stdout == ''


def test_cli_interactive(tmp_path):
    path = write_program(tmp_path, '3,9,8,9,10,9,4,9,99,-1,8')
    result = CliRunner().invoke(emulator.run, [path, '--interactive'], input='8\n')

    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout.splitlines()[-1] == '1'


def test_cli_fault(tmp_path):
    path = write_program(tmp_path, '104,3,42')
    result = CliRunner().invoke(emulator.run, [path])

    assert result.exit_code == emulator.EXIT_FAULT
    assert result.stdout == '3\n'


def test_cli_step_limit(tmp_path):
    path = write_program(tmp_path, '1105,1,0')
    result = CliRunner().invoke(emulator.run, [path, '--max-steps', '50'])

    assert result.exit_code == emulator.EXIT_STEP_LIMIT


def test_cli_lenient_modes(tmp_path):
    path = write_program(tmp_path, '204,0,99')

    result = CliRunner().invoke(emulator.run, [path])
    assert result.exit_code == emulator.EXIT_FAULT

    result = CliRunner().invoke(emulator.run, [path, '--lenient-modes'])
    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '204\n'


def test_cli_config(tmp_path):
    path = write_program(tmp_path, '204,0,99')
    config = str(find_file('testdata/machine.toml'))
    result = CliRunner().invoke(emulator.run, [path, '-c', config])

    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '204\n'


def test_cli_bad_program(tmp_path):
    path = write_program(tmp_path, '1,2,three')
    result = CliRunner().invoke(emulator.run, [path])

    assert result.exit_code == emulator.EXIT_EXEC_ERROR


@pytest.mark.parametrize('max_steps', ['0', '-5'])
def test_cli_bad_step_limit(tmp_path, max_steps):
    path = write_program(tmp_path, '99')
    result = CliRunner().invoke(emulator.run, [path, '--max-steps', max_steps])

    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_cli_bad_config(tmp_path):
    path = write_program(tmp_path, '99')
    config = tmp_path / 'machine.toml'
    config.write_text('[machine]\nstep_limit = "ten"\n')
    result = CliRunner().invoke(emulator.run, [path, '-c', str(config)])

    assert result.exit_code == emulator.EXIT_EXEC_ERROR


def test_assemble_and_run(tmp_path):
    program = tmp_path / 'out' / 'countdown.intcode'
    source = str(find_file('testdata/countdown.sasm'))

    result = CliRunner().invoke(asm.compile, [source, str(program)])
    assert result.exit_code == 0
    assert program.read_text() == '3,12,4,12,1001,12,-1,12,1005,12,2,99,0\n'

    result = CliRunner().invoke(emulator.run, [str(program), '-i', '3'])
    assert result.exit_code == emulator.EXIT_HALT
    assert result.stdout == '3\n2\n1\n'
