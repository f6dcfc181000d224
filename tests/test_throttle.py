"""Tests for the operation throttle."""

from unittest.mock import Mock

from fat_sorter.core.throttle import OperationThrottle
from fat_sorter.models.config import ThrottleConfig


class TestOperationThrottle:
    """Test OperationThrottle."""

    def test_defaults(self):
        throttle = OperationThrottle()

        assert throttle.create_ms == 20
        assert throttle.delete_ms == 50
        assert throttle.move_ms == 10
        assert throttle.rename_ms == 200

    def test_each_delay_in_seconds(self):
        sleep = Mock()
        throttle = OperationThrottle(create_ms=1, delete_ms=2, move_ms=3, rename_ms=4, sleep=sleep)

        throttle.before_create()
        throttle.before_delete()
        throttle.before_move()
        throttle.before_rename()

        assert [call.args[0] for call in sleep.call_args_list] == [0.001, 0.002, 0.003, 0.004]

    def test_zero_disables_delay(self):
        sleep = Mock()
        throttle = OperationThrottle(create_ms=0, delete_ms=0, move_ms=5, rename_ms=0, sleep=sleep)

        throttle.before_create()
        throttle.before_delete()
        throttle.before_rename()

        sleep.assert_not_called()

    def test_disabled(self):
        throttle = OperationThrottle.disabled()

        assert (throttle.create_ms, throttle.delete_ms, throttle.move_ms, throttle.rename_ms) == (0, 0, 0, 0)

    def test_from_config(self):
        sleep = Mock()
        throttle = OperationThrottle.from_config(
            ThrottleConfig(create_ms=5, delete_ms=6, move_ms=7, rename_ms=8), sleep=sleep
        )

        throttle.before_move()

        assert throttle.create_ms == 5
        assert throttle.rename_ms == 8
        sleep.assert_called_once_with(0.007)
