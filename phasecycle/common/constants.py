#  Copyright 2024 Jacob Jewett
#
#  Licensed under the Apache License, Version 2.0 (the "License");
#  you may not use this file except in compliance with the License.
#  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
#  limitations under the License.
from enum import IntEnum, Enum, auto


DEFAULT_MIN_DURATION = 4.0
DEFAULT_MAX_DURATION = 6.0
DEFAULT_INCREMENT = 0.1
CYCLER_THREAD_NAME = 'PhaseCycler'
CYCLER_SHUTDOWN_TIMEOUT = 5.0
DEFAULT_LEVELS = 'info,warning;stderr=warning;file=info'
DEBUG_LEVELS = 'debug,warning;stderr=warning;file=timing'


class ExitCode(IntEnum):
    OK = 0
    LOG_LEVEL_PARSE_FAIL = 1
    LOG_FILE_STRUCTURE_FAIL = 2
    CONFIG_INVALID = 3
    INTERRUPTED = 4


class QueueOrder(Enum):
    LIFO = auto()
    FIFO = auto()
