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
import sys
import argparse
import itertools
from threading import Thread
from pathlib import Path
from loguru import logger
from phasecycle import __version__ as phasecycle_version
from phasecycle import config
from phasecycle.cycler import Phase, PhaseCycler
from phasecycle.logging import setup_logger
from phasecycle.common.errors import ErrorType, CyclerError
from phasecycle.common.constants import DEFAULT_LEVELS, DEBUG_LEVELS, CYCLER_SHUTDOWN_TIMEOUT, ExitCode


RENDER_INTERVAL = 0.5


def get_cli_args(argv=None):
    root = argparse.ArgumentParser(description='Randomized two-phase cycler demonstration.')
    
    if __debug__:
        log_levels = DEBUG_LEVELS
    else:
        log_levels = DEFAULT_LEVELS
    
    root.add_argument('-L', '--levels',
                      type=str,
                      dest='log_levels',
                      default=log_levels,
                      help='Define logging levels.')
    root.add_argument('-l', '--log',
                      type=Path,
                      dest='log_file',
                      default=None,
                      help='Define log file path.')
    root.add_argument('-c', '--config',
                      type=Path,
                      dest='config_files',
                      action='append',
                      default=[],
                      help='JSON configuration file, may be repeated. Later files take precedence.')
    root.add_argument('--min',
                      type=float,
                      dest='min_duration',
                      help='Minimum cycle duration in seconds.')
    root.add_argument('--max',
                      type=float,
                      dest='max_duration',
                      help='Maximum cycle duration in seconds.')
    root.add_argument('--increment',
                      type=float,
                      dest='increment',
                      help='Elapsed-time check increment in seconds.')
    root.add_argument('--seed',
                      type=int,
                      dest='seed',
                      help='Seed for the cycle duration generator.')
    root.add_argument('-n', '--cycles',
                      type=int,
                      dest='cycles',
                      default=0,
                      help='Exit after this many green phases (0 runs until interrupted).')
    
    return vars(root.parse_args(argv))


def wait_for_green(cycler: PhaseCycler, cycles: int):
    counter = itertools.count(1) if cycles <= 0 else range(1, cycles + 1)
    for i in counter:
        try:
            change = cycler.wait_for_phase(Phase.GREEN)
        except CyclerError as e:
            if e.generic_error == ErrorType.STOPPED:
                logger.verb('waiter released by shutdown')
                return
            raise
        logger.info('green #{} arrived (change {})', i, change.generation)


def run(argv=None):
    cla = get_cli_args(argv)
    
    levels_notation = cla['log_levels']
    try:
        setup_logger(levels_notation, log_file=cla['log_file'])
    except (ValueError, KeyError) as e:
        print(f'Malformed logging level specification "{levels_notation}":', e)
        return ExitCode.LOG_LEVEL_PARSE_FAIL
    
    logger.info('phasecycle v{}', phasecycle_version)
    
    try:
        cycler_config = config.load_paths(cla['config_files'],
                                          min_duration=cla['min_duration'],
                                          max_duration=cla['max_duration'],
                                          increment=cla['increment'])
    except CyclerError as e:
        logger.error('configuration error: {}', str(e))
        return ExitCode.CONFIG_INVALID
    
    cycler = PhaseCycler(cycler_config, seed=cla['seed'])
    cycler.add_listener(lambda change: logger.info('phase {}', change.phase.name))
    waiter = Thread(target=wait_for_green,
                    args=(cycler, cla['cycles']),
                    name='GreenWaiter',
                    daemon=True)
    
    code = ExitCode.OK
    cycler.start()
    waiter.start()
    try:
        while waiter.is_alive():
            waiter.join(RENDER_INTERVAL)
            logger.verb('current phase {}', cycler.current_phase().name)
    except KeyboardInterrupt:
        logger.info('interrupted')
        code = ExitCode.INTERRUPTED
    finally:
        cycler.stop(CYCLER_SHUTDOWN_TIMEOUT)
        waiter.join(CYCLER_SHUTDOWN_TIMEOUT)
    
    return code


if __name__ == '__main__':
    sys.exit(run())
