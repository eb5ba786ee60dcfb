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
import enum


class ErrorType(enum.Enum):
    ALREADY_STARTED = 1
    NOT_STARTED = 2
    ALREADY_STOPPED = 3
    STOPPED = 4
    INVALID_CONFIG = 5


class CyclerError(Exception):
    
    @property
    def generic_error(self):
        return self._error
    
    @property
    def details(self):
        return self._details
    
    def __init__(self, generic_error: ErrorType, **details):
        Exception.__init__(self, generic_error.name.lower().replace('_', ' '))
        self._error = generic_error
        self._details = details
    
    def __str__(self):
        text = self._error.name.lower().replace('_', ' ')
        if self._details:
            extra = ', '.join([f'{k}={v}' for k, v in self._details.items()])
            return f'{text} ({extra})'
        return text


class QueueClosedError(Exception):
    pass
