import logging
import time
from typing import Optional

import serial

logger = logging.getLogger(__name__)


class SerialTrigger:
    """Fires when the push button box sends anything over the serial port."""

    def __init__(self, port: str, baudrate: int = 9600, poll_interval: float = 0.05):
        self.poll_interval = poll_interval
        self.serial_connection = serial.Serial(port, baudrate, timeout=0)
        logger.info("Trigger listening on %s @ %d", port, baudrate)

    def poll(self) -> bool:
        """Consume pending bytes; True if there were any."""
        pending = self.serial_connection.in_waiting
        if pending <= 0:
            return False
        self.serial_connection.read(pending)
        return True

    def wait(self) -> None:
        """Block until the trigger fires."""
        while not self.poll():
            time.sleep(self.poll_interval)

    def close(self) -> None:
        if self.serial_connection.is_open:
            self.serial_connection.close()

    def __enter__(self) -> 'SerialTrigger':
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def create_trigger(port: Optional[str], baudrate: int = 9600) -> Optional[SerialTrigger]:
    if not port:
        return None
    return SerialTrigger(port, baudrate)
