"""Tests for the serial trigger."""

import unittest
from unittest import mock

from blockstack.utils.trigger import SerialTrigger, create_trigger


class TestSerialTrigger(unittest.TestCase):
    def test_no_port_no_trigger(self) -> None:
        self.assertIsNone(create_trigger(None))
        self.assertIsNone(create_trigger(""))

    def test_poll_and_wait(self) -> None:
        with mock.patch("blockstack.utils.trigger.serial.Serial") as serial_cls:
            port = serial_cls.return_value
            type(port).in_waiting = mock.PropertyMock(side_effect=[0, 0, 0, 2])
            trigger = SerialTrigger("/dev/ttyUSB0", 9600, poll_interval=0)
            serial_cls.assert_called_once_with("/dev/ttyUSB0", 9600, timeout=0)

            self.assertFalse(trigger.poll())
            trigger.wait()
            port.read.assert_called_once_with(2)

    def test_close(self) -> None:
        with mock.patch("blockstack.utils.trigger.serial.Serial") as serial_cls:
            port = serial_cls.return_value
            port.is_open = True
            with create_trigger("COM3") as trigger:
                self.assertIsInstance(trigger, SerialTrigger)
            port.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
