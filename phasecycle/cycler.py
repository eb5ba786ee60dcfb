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
import random
from enum import IntEnum
from typing import Callable, List, Optional
from threading import Lock, current_thread
from loguru import logger
from phasecycle.config import CyclerConfig
from phasecycle.common.timing import SystemTimer
from phasecycle.common.errors import ErrorType, CyclerError, QueueClosedError
from phasecycle.common.structs import PhaseChange
from phasecycle.common.parallel import ThreadedTickable
from phasecycle.common.constants import CYCLER_THREAD_NAME, QueueOrder
from phasecycle.common.primitives import BlockingQueue


class Phase(IntEnum):
    RED                 = 0
    GREEN               = 1
    
    def toggled(self) -> 'Phase':
        return Phase.GREEN if self == Phase.RED else Phase.RED


PhaseListener = Callable[[PhaseChange], None]


class PhaseCycler(ThreadedTickable):
    """
    Alternates between red and green on a randomized schedule.
    
    Each cycle lasts a duration drawn uniformly from the configured bounds.
    The elapsed time is checked once per increment, so a cycle can overrun
    its drawn duration by at most one increment. Every toggle is published
    to an internal queue that `wait_for_phase` consumes.
    """
    
    @property
    def config(self):
        return self._config
    
    @property
    def last_change(self) -> PhaseChange:
        return self._last_change
    
    @property
    def running(self):
        return self.is_alive() and not self.stopped
    
    def __init__(self,
                 config: Optional[CyclerConfig] = None,
                 seed: Optional[int] = None):
        self._config = config or CyclerConfig()
        ThreadedTickable.__init__(self,
                                  self._config.increment,
                                  thread_name=CYCLER_THREAD_NAME)
        self._random = random.Random(seed)
        self._queue: BlockingQueue[PhaseChange] = BlockingQueue(QueueOrder.LIFO)
        self._listeners: List[PhaseListener] = []
        self._timer = SystemTimer(self._draw_duration())
        self._start_lock = Lock()
        self._launched = False
        
        # replaced by reference assignment only, from the cycling thread
        self._last_change = PhaseChange(Phase.RED, 0, self._timer.marker)
    
    def _draw_duration(self) -> float:
        return self._random.uniform(self._config.min_duration,
                                    self._config.max_duration)
    
    def current_phase(self) -> Phase:
        return self._last_change.phase
    
    def add_listener(self, listener: PhaseListener):
        self._listeners.append(listener)
    
    def start(self):
        with self._start_lock:
            if self._launched:
                raise CyclerError(ErrorType.ALREADY_STARTED, name=self.name)
            self._launched = True
            
            logger.debug('starting cycler ({}-{}s, increment {}s)',
                         self._config.min_duration,
                         self._config.max_duration,
                         self._config.increment)
            ThreadedTickable.start(self)
    
    def before_run(self):
        self._timer.reset()
        logger.timing('first cycle {:.3f}s', self._timer.trigger)
    
    def tick(self):
        if not self._timer.poll():
            return
        
        marker = self._timer.reset()
        self._timer.trigger = self._draw_duration()
        
        previous = self._last_change
        change = PhaseChange(previous.phase.toggled(),
                             previous.generation + 1,
                             marker)
        self._last_change = change
        logger.timing('{} -> {}, next cycle {:.3f}s',
                      previous.phase.name,
                      change.phase.name,
                      self._timer.trigger)
        
        try:
            self._queue.send(change)
        except QueueClosedError:
            return
        
        for listener in self._listeners:
            try:
                listener(change)
            except Exception:
                logger.exception('phase listener {} failed', listener)
    
    def wait_for_phase(self, target: Phase) -> PhaseChange:
        """
        Block until the cycler publishes `target`.
        
        Changes committed before this call are discarded, except the one
        current at the time of the call if it is still queued.
        
        :param target: Phase to wait for.
        :return: The change that delivered `target`.
        :raises CyclerError: STOPPED if the cycler stops first.
        """
        since = self._last_change.generation
        while True:
            try:
                change = self._queue.receive()
            except QueueClosedError:
                raise CyclerError(ErrorType.STOPPED, target=target.name) from None
            
            if change.generation >= since and change.phase == target:
                return change
    
    def after_stop(self):
        self._queue.close()
    
    def stop(self, timeout: Optional[float] = None):
        with self._start_lock:
            launched = self._launched
        if not launched:
            raise CyclerError(ErrorType.NOT_STARTED, name=self.name)
        try:
            ThreadedTickable.stop(self)
        except RuntimeError:
            raise CyclerError(ErrorType.ALREADY_STOPPED, name=self.name) from None
        
        if current_thread() is not self:
            self.join(timeout)
        
        logger.debug('cycler stopped at {}', self._last_change)
    
    def __enter__(self):
        self.start()
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        if not self.stopped:
            self.stop()
    
    def __repr__(self):
        return f'<PhaseCycler {self.current_phase().name} #{self._last_change.generation}>'
