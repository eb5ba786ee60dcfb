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
from time import perf_counter


def seconds() -> float:
    return perf_counter()


class SystemTimer:
    """Elapsed seconds since the last reset, compared against a trigger."""

    @property
    def marker(self):
        return self._marker

    def __init__(self, trigger_init: float):
        self._marker = seconds()
        self.trigger = trigger_init

    def delta(self) -> float:
        return seconds() - self._marker

    def poll(self) -> bool:
        return self.delta() > self.trigger

    def reset(self) -> float:
        self._marker = seconds()
        return self._marker
    
    def __repr__(self):
        return f'<SystemTimer {self.delta():.3f}/{self.trigger:.3f}>'
