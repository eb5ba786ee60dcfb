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
import re
import sys
from datetime import timedelta
from functools import partialmethod
from pathlib import Path
from typing import Dict, Optional, Tuple
import loguru
from phasecycle.common.constants import ExitCode


QUENCH_LOG_EXCEPTIONS = True
SINKS = ('stdout', 'stderr', 'file')
LEVEL_RANGE_PATTERN = re.compile(r'^(\w+)(?:,(\w+))?$')
CUSTOM_LEVELS = (
    ('TIMING', 3, '<d>'),
    ('QUEUE', 4, '<d>'),
    ('VERB', 7, '<c>')
)


LevelRange = Tuple[int, Optional[int]]


def register_custom_levels(l):
    klass = l.__class__
    for name, no, color in CUSTOM_LEVELS:
        try:
            l.level(name)
        except ValueError:
            l.level(name, no=no, color=color)
        setattr(klass, name.lower(), partialmethod(klass.log, name))


def level_number(l, name: str) -> int:
    if name.isdigit():
        return int(name)
    try:
        return l.level(name.upper()).no
    except ValueError:
        raise ValueError(f'unknown logging level "{name}"') from None


def parse_level_range(l, text: str) -> LevelRange:
    match = LEVEL_RANGE_PATTERN.match(text.strip())
    if match is None:
        raise ValueError(f'invalid logging level range "{text}"')
    
    lower = level_number(l, match.group(1))
    if match.group(2) is None:
        return lower, None
    
    upper = level_number(l, match.group(2))
    if lower >= upper:
        raise ValueError(f'empty logging level range "{text}" ({lower} >= {upper})')
    return lower, upper


def parse_log_level_shorthand(l, notation: Optional[str]) -> Dict[str, LevelRange]:
    """
    Parse level notation such as ``info,warning;stderr=warning;file=debug``.
    
    Each part is ``[sink=]lower[,upper]``. A part without a sink name sets
    the range of every sink not named explicitly. The upper bound is
    exclusive; levels may be given by name or number.
    """
    default = None
    explicit = {}
    
    for part in (notation or '').split(';'):
        sink, assigned, text = part.strip().rpartition('=')
        if not text:
            continue
        if assigned:
            sink = sink.strip()
            if sink not in SINKS:
                raise KeyError(f'unknown logging sink "{sink}"')
            explicit[sink] = parse_level_range(l, text)
        elif default is None:
            default = parse_level_range(l, text)
        else:
            raise ValueError('default logging level range already defined')
    
    return {sink: explicit.get(sink, default or (0, None)) for sink in SINKS}


def add_sink(l, sink, level_range: LevelRange, timestamp=False, **kwargs):
    fmt = '<level>{level: >8}</level>: {message} '
    if timestamp:
        fmt = '[{time:YYYY-MM-DD HH:mm:ss.SSS}] ' + fmt
    if __debug__:
        fmt += '<d>[<i>{thread.name}:{file}:{line}</i>]</d> '
    
    lower, upper = level_range
    if upper is not None:
        kwargs['filter'] = lambda record: record['level'].no < upper
    
    l.add(sink, level=lower, format=fmt, catch=QUENCH_LOG_EXCEPTIONS, **kwargs)


def setup_logger(notation: Optional[str],
                 log_file: Optional[Path] = None,
                 rotation: timedelta = timedelta(days=1),
                 retention: timedelta = timedelta(days=7)):
    logger = loguru.logger
    logger.remove()
    register_custom_levels(logger)
    
    levels = parse_log_level_shorthand(logger, notation)
    add_sink(logger, sys.stdout, levels['stdout'], colorize=True)
    add_sink(logger, sys.stderr, levels['stderr'], colorize=True)
    
    if log_file is not None:
        log_file = Path(log_file)
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error('failed to create log directory ({})', str(e))
            sys.exit(ExitCode.LOG_FILE_STRUCTURE_FAIL)
        
        add_sink(logger,
                 log_file,
                 levels['file'],
                 timestamp=True,
                 backtrace=True,
                 rotation=rotation,
                 retention=retention,
                 compression='gz')
    
    logger.info('log levels {}', ', '.join([f'{k}={v}' for k, v in levels.items()]))
    return logger
