import logging
import random

import pytest

from yahtzee_core import config


class ScriptedRandom(random.Random):
    """Random source that replays a fixed sequence of die faces."""

    def __init__(self, faces):
        super().__init__(0)
        self._faces = list(faces)
        self._position = 0

    def randint(self, a, b):
        value = self._faces[self._position % len(self._faces)]
        self._position += 1
        assert a <= value <= b
        return value


def scripted_trial(winning_attempt, losing_roll=(1, 2, 3, 4, 5), winning_roll=(4, 4, 4, 4, 4)):
    """Return faces that lose ``winning_attempt - 1`` times and then win."""

    faces = list(losing_roll) * (winning_attempt - 1)
    faces.extend(winning_roll)
    return faces


@pytest.fixture(autouse=True)
def restore_global_state():
    yield
    config.set_max_trials(config.MAX_TRIALS_DEFAULT)
    package_logger = logging.getLogger("yahtzee_core")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)
    logging.getLogger().setLevel(logging.WARNING)
