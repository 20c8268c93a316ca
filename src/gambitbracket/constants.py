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

from datetime import datetime

from dateutil.tz import UTC

# --- Series ---
DEFAULT_BEST_OF = 1
MAX_SERIES_TEAMS = 2
GAME_NAME_TEMPLATE = "Game {number}"

# --- Placements ---
CHAMPION_POSITION = 1
RUNNER_UP_POSITION = 2

# --- Bracket types ---
BRACKET_SINGLE_ELIMINATION = "single_elimination"
DEFAULT_BRACKET_TYPE = BRACKET_SINGLE_ELIMINATION

# --- Snowflake layout ---
# 42 bits timestamp | 10 bits worker | 12 bits increment
SNOWFLAKE_EPOCH = datetime(2022, 1, 1, tzinfo=UTC)
SNOWFLAKE_WORKER_BITS = 10
SNOWFLAKE_INCREMENT_BITS = 12
SNOWFLAKE_MAX_WORKER_ID = (1 << SNOWFLAKE_WORKER_BITS) - 1
SNOWFLAKE_MAX_INCREMENT = (1 << SNOWFLAKE_INCREMENT_BITS) - 1
SNOWFLAKE_TIMESTAMP_SHIFT = SNOWFLAKE_WORKER_BITS + SNOWFLAKE_INCREMENT_BITS
SNOWFLAKE_MAX_VALUE = (1 << 64) - 1

# --- Logging ---
LOGGER_ROOT = "gambitbracket"
LOG_LEVEL_ENV_VAR = "GAMBIT_BRACKET_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
