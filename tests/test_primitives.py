import time
import pytest
from threading import Lock, Thread
from loguru import logger
from phasecycle.common.errors import QueueClosedError
from phasecycle.common.constants import QueueOrder
from phasecycle.common.primitives import BlockingQueue


JOIN_TIMEOUT = 5.0


class Receiver(Thread):
    
    def __init__(self, queue: BlockingQueue, count: int = 1):
        Thread.__init__(self, daemon=True)
        self.queue = queue
        self.count = count
        self.values = []
        self.error = None
    
    def run(self):
        try:
            for _ in range(self.count):
                self.values.append(self.queue.receive())
        except QueueClosedError as e:
            self.error = e


def test_default_order_is_lifo():
    q = BlockingQueue()
    assert q.order == QueueOrder.LIFO
    
    for v in (1, 2, 3):
        q.send(v)
    
    r = Receiver(q, 3)
    r.start()
    r.join(JOIN_TIMEOUT)
    
    assert not r.is_alive()
    assert r.values == [3, 2, 1]


def test_fifo_order():
    q = BlockingQueue(QueueOrder.FIFO)
    
    for v in (1, 2, 3):
        q.send(v)
    
    assert [q.receive() for _ in range(3)] == [1, 2, 3]


def test_two_receivers_two_pending():
    q = BlockingQueue()
    q.send('a')
    q.send('b')
    
    receivers = [Receiver(q), Receiver(q)]
    for r in receivers:
        r.start()
    for r in receivers:
        r.join(JOIN_TIMEOUT)
        assert not r.is_alive()
    
    received = receivers[0].values + receivers[1].values
    assert sorted(received) == ['a', 'b']
    assert len(q) == 0


def test_receive_blocks_until_send():
    q = BlockingQueue()
    r = Receiver(q)
    r.start()
    
    time.sleep(0.1)
    assert r.is_alive()
    assert r.values == []
    
    q.send(42)
    r.join(JOIN_TIMEOUT)
    
    assert not r.is_alive()
    assert r.values == [42]


def test_many_producers_and_consumers():
    producers = 4
    consumers = 4
    per_producer = 250
    q = BlockingQueue()
    received = []
    received_lock = Lock()
    
    def produce(offset):
        for i in range(per_producer):
            q.send(offset + i)
    
    def consume(count):
        for _ in range(count):
            v = q.receive()
            with received_lock:
                received.append(v)
    
    total = producers * per_producer
    threads = [Thread(target=consume, args=(total // consumers,), daemon=True)
               for _ in range(consumers)]
    threads.extend([Thread(target=produce, args=(n * per_producer,), daemon=True)
                    for n in range(producers)])
    
    for t in threads:
        t.start()
    for t in threads:
        t.join(JOIN_TIMEOUT)
        assert not t.is_alive()
    
    assert sorted(received) == list(range(total))
    assert len(q) == 0


def test_close_wakes_blocked_receivers():
    q = BlockingQueue()
    receivers = [Receiver(q) for _ in range(3)]
    for r in receivers:
        r.start()
    
    time.sleep(0.1)
    q.close()
    
    for r in receivers:
        r.join(JOIN_TIMEOUT)
        assert not r.is_alive()
        assert isinstance(r.error, QueueClosedError)
        assert r.values == []


def test_close_delivers_pending_first():
    q = BlockingQueue()
    q.send(1)
    q.close()
    
    assert q.closed
    assert q.receive() == 1
    with pytest.raises(QueueClosedError):
        q.receive()


def test_send_and_close_are_logged():
    messages = []
    sink = logger.add(lambda m: messages.append(m.record['message']), level='QUEUE')
    try:
        q = BlockingQueue()
        q.send(1)
        q.send(2)
        q.close()
    finally:
        logger.remove(sink)
    
    assert messages == [
        'value added to queue (1 pending)',
        'value added to queue (2 pending)',
        'queue closed (2 pending)'
    ]


def test_send_after_close():
    q = BlockingQueue()
    q.close()
    q.close()
    
    with pytest.raises(QueueClosedError):
        q.send(1)
    assert len(q) == 0
