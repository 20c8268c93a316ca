"""Snowflake identifiers.

Every entity in a bracket is identified by a snowflake: a 64-bit integer
rendered as a decimal string. The high bits hold the creation time, so
ids sort in creation order and the timestamp can be read back out.
"""

# Gambit Bracket
# Copyright (C) 2025  Gambit Bracket developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from gambitbracket.constants import (
    SNOWFLAKE_EPOCH,
    SNOWFLAKE_INCREMENT_BITS,
    SNOWFLAKE_MAX_INCREMENT,
    SNOWFLAKE_MAX_VALUE,
    SNOWFLAKE_MAX_WORKER_ID,
    SNOWFLAKE_TIMESTAMP_SHIFT,
)
from gambitbracket.exceptions import InvalidArgumentException
from gambitbracket.utils import setup_logger

logger = setup_logger(__name__)

_EPOCH_MS = int(SNOWFLAKE_EPOCH.timestamp() * 1000)


@dataclass(frozen=True)
class Snowflake:
    """A single snowflake identifier.

    Attributes:
        value: The raw 64-bit integer
    """

    value: int

    def __str__(self) -> str:
        return str(self.value)

    @property
    def timestamp(self) -> datetime:
        """UTC creation time encoded in the identifier."""
        ms = self.value >> SNOWFLAKE_TIMESTAMP_SHIFT
        return SNOWFLAKE_EPOCH + timedelta(milliseconds=ms)

    @property
    def worker_id(self) -> int:
        return (self.value >> SNOWFLAKE_INCREMENT_BITS) & SNOWFLAKE_MAX_WORKER_ID

    @property
    def increment(self) -> int:
        return self.value & SNOWFLAKE_MAX_INCREMENT

    @staticmethod
    def validate(value: Any) -> bool:
        """Check that ``value`` is the string form of a snowflake.

        Args:
            value: Candidate identifier

        Returns:
            True for a decimal string without a leading zero in ``(0, 2**64)``
        """
        if not isinstance(value, str) or not value:
            return False
        if not value.isascii() or not value.isdigit():
            return False
        if value[0] == "0":
            return False
        return 0 < int(value) <= SNOWFLAKE_MAX_VALUE

    @classmethod
    def parse(cls, value: str) -> "Snowflake":
        """Parse an identifier string.

        Raises:
            InvalidArgumentException: If the string is not a valid snowflake
        """
        if not cls.validate(value):
            raise InvalidArgumentException(f"Invalid snowflake provided: {value!r}")
        return cls(int(value))


class SnowflakeService:
    """Generates unique, time ordered snowflakes for one worker.

    Generation is thread safe. When more than 4096 ids are requested within
    the same millisecond the service waits for the clock to move on.
    """

    def __init__(self, worker_id: int = 0) -> None:
        if not 0 <= worker_id <= SNOWFLAKE_MAX_WORKER_ID:
            raise InvalidArgumentException(
                f"Invalid worker id {worker_id} "
                f"(must be between 0 and {SNOWFLAKE_MAX_WORKER_ID})"
            )
        self.worker_id = worker_id
        self._lock = threading.Lock()
        self._last_ms = -1
        self._increment = 0

    @staticmethod
    def _now_ms() -> int:
        return int(time.time() * 1000) - _EPOCH_MS

    def generate(self) -> Snowflake:
        """Create a new identifier, greater than every one created before."""
        with self._lock:
            now = self._now_ms()
            if now < self._last_ms:
                logger.warning(
                    f"Clock moved backwards by {self._last_ms - now}ms, "
                    "reusing last timestamp"
                )
                now = self._last_ms

            if now == self._last_ms:
                self._increment = (self._increment + 1) & SNOWFLAKE_MAX_INCREMENT
                if self._increment == 0:
                    while now <= self._last_ms:
                        now = self._now_ms()
            else:
                self._increment = 0

            self._last_ms = now
            value = (
                (now << SNOWFLAKE_TIMESTAMP_SHIFT)
                | (self.worker_id << SNOWFLAKE_INCREMENT_BITS)
                | self._increment
            )
        return Snowflake(value)

    def validate(self, value: Any) -> bool:
        """Check whether ``value`` is a valid identifier string."""
        return Snowflake.validate(value)

    def timestamp_of(self, value: str) -> datetime:
        """Get the creation time of an identifier.

        Raises:
            InvalidArgumentException: If the string is not a valid snowflake
        """
        return Snowflake.parse(value).timestamp
