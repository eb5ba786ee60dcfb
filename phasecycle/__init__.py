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
from loguru import logger as _logger
from phasecycle.logging import register_custom_levels

register_custom_levels(_logger)

from phasecycle.common.errors import ErrorType, CyclerError, QueueClosedError
from phasecycle.common.structs import PhaseChange
from phasecycle.common.constants import QueueOrder
from phasecycle.common.primitives import BlockingQueue
from phasecycle.config import CyclerConfig
from phasecycle.cycler import Phase, PhaseCycler


__version__ = '1.0.0'
__all__ = [
    'BlockingQueue',
    'CyclerConfig',
    'CyclerError',
    'ErrorType',
    'Phase',
    'PhaseChange',
    'PhaseCycler',
    'QueueClosedError',
    'QueueOrder'
]
