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
from abc import ABC, abstractmethod
from typing import Any
from threading import Event, Lock, Thread


class Tickable(ABC):

    @property
    def tick_delay(self):
        return self._tick_delay

    def __init__(self, tick_delay: float):
        self._tick_delay = tick_delay

    @abstractmethod
    def tick(self, *args, **kwargs) -> Any:
        pass


class ThreadedTickable(Thread, Tickable):
    """
    Thread that calls `tick` once every `tick_delay` seconds until stopped.
    
    The delay is spent waiting on the stop event, so `stop` takes effect
    within one delay.
    """

    @property
    def stopped(self):
        return self._stop_event.is_set()

    def __init__(self, tick_delay: float, thread_name=None, daemon=True):
        Tickable.__init__(self, tick_delay)
        Thread.__init__(self, name=thread_name, daemon=daemon)
        self._stop_event = Event()
        self._stop_lock = Lock()

    @abstractmethod
    def tick(self, *args, **kwargs) -> Any:
        pass

    def before_run(self):
        pass

    def run(self):
        self.before_run()
        while not self._stop_event.wait(self.tick_delay):
            self.tick()

    def after_stop(self):
        pass

    def stop(self):
        with self._stop_lock:
            if self.stopped:
                raise RuntimeError('already stopped')
            self._stop_event.set()
        self.after_stop()
