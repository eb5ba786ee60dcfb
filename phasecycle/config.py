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
import json
from typing import TextIO, Iterable
from pathlib import Path
from contextlib import ExitStack
from pydantic import BaseModel, ConfigDict, PositiveFloat, ValidationError, model_validator
from phasecycle.common.errors import ErrorType, CyclerError
from phasecycle.common.constants import DEFAULT_MIN_DURATION, DEFAULT_MAX_DURATION, DEFAULT_INCREMENT


class CyclerConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra='forbid')
    
    min_duration: PositiveFloat = DEFAULT_MIN_DURATION
    max_duration: PositiveFloat = DEFAULT_MAX_DURATION
    increment: PositiveFloat = DEFAULT_INCREMENT
    
    @model_validator(mode='after')
    def check_bounds(self):
        if self.min_duration > self.max_duration:
            raise ValueError(f'min_duration ({self.min_duration}) exceeds '
                             f'max_duration ({self.max_duration})')
        if self.increment > self.min_duration:
            raise ValueError(f'increment ({self.increment}) exceeds '
                             f'min_duration ({self.min_duration})')
        return self


def load(streams: Iterable[TextIO], **overrides) -> CyclerConfig:
    """
    Merge JSON objects from `streams` into one configuration.
    
    Keys in later streams replace those in earlier ones; `overrides` that
    are not None are applied last.
    """
    composite = {}
    
    for stream in streams:
        stream.seek(0)
        try:
            fragment = json.load(stream)
        except json.JSONDecodeError as e:
            raise CyclerError(ErrorType.INVALID_CONFIG,
                              file=getattr(stream, 'name', None),
                              reason=str(e)) from e
        if not isinstance(fragment, dict):
            raise CyclerError(ErrorType.INVALID_CONFIG,
                              file=getattr(stream, 'name', None),
                              reason='root node must be an object')
        composite = composite | fragment
    
    composite |= {k: v for k, v in overrides.items() if v is not None}
    
    try:
        return CyclerConfig(**composite)
    except ValidationError as e:
        raise CyclerError(ErrorType.INVALID_CONFIG,
                          errors=e.error_count(),
                          reason=str(e)) from e


def load_paths(paths: Iterable[Path], **overrides) -> CyclerConfig:
    with ExitStack() as stack:
        try:
            streams = [stack.enter_context(open(path)) for path in paths]
        except OSError as e:
            raise CyclerError(ErrorType.INVALID_CONFIG,
                              file=e.filename,
                              reason=e.strerror) from e
        return load(streams, **overrides)
