# type: ignore
import pytest

from intcode.common.settings import MachineSettings

import unit_utils


@pytest.fixture
def compare_with_8():
    yield unit_utils.load_testdata('compare8')


@pytest.fixture
def bounded_settings():
    yield MachineSettings().update(step_limit=1000)
