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
from enum import IntEnum
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PhaseChange:
    phase: IntEnum
    generation: int
    timestamp: float
    
    def __repr__(self):
        return f'<PhaseChange #{self.generation} {self.phase.name} T{self.timestamp:0.3f}>'
