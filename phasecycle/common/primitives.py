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
from typing import Deque, Generic, TypeVar
from collections import deque
from threading import Condition, Lock
from loguru import logger
from phasecycle.common.errors import QueueClosedError
from phasecycle.common.constants import QueueOrder


T = TypeVar('T')


class BlockingQueue(Generic[T]):
    """
    Unbounded hand-off buffer between producer and consumer threads.
    
    Every value sent is received by exactly one caller of `receive`. The
    default removal order is LIFO, so the most recently sent value is
    delivered first.
    """
    
    @property
    def order(self):
        return self._order
    
    @property
    def closed(self):
        with self._lock:
            return self._closed
    
    def __init__(self, order: QueueOrder = QueueOrder.LIFO):
        self._order = order
        self._lock = Lock()
        self._cond = Condition(self._lock)
        self._buffer: Deque[T] = deque()
        self._closed = False
    
    def __len__(self):
        with self._lock:
            return len(self._buffer)
    
    def send(self, value: T):
        """
        Append a value and wake one blocked receiver. Never blocks.

        :param value: Value to deliver.
        :raises QueueClosedError: the queue has been closed.
        """
        with self._cond:
            if self._closed:
                raise QueueClosedError('send on closed queue')
            self._buffer.append(value)
            pending = len(self._buffer)
            self._cond.notify()
        
        logger.queue('value added to queue ({} pending)', pending)
    
    def _ready(self) -> bool:
        return bool(self._buffer) or self._closed
    
    def receive(self) -> T:
        """
        Block until a value is available, then remove and return it.
        
        Values still buffered when the queue is closed are delivered before
        closure is reported.
        
        :return: One value previously passed to `send`.
        :raises QueueClosedError: the queue is closed and empty.
        """
        with self._cond:
            self._cond.wait_for(self._ready)
            
            if not self._buffer:
                raise QueueClosedError('receive on closed queue')
            
            if self._order == QueueOrder.LIFO:
                return self._buffer.pop()
            else:
                return self._buffer.popleft()
    
    def close(self):
        """Refuse further values and wake every blocked receiver."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            pending = len(self._buffer)
            self._cond.notify_all()
        
        logger.queue('queue closed ({} pending)', pending)
    
    def __repr__(self):
        return f'<BlockingQueue {self._order.name} {len(self)}>'
