import pytest

from rehabsched.containers import ArrayStack, LinkedQueue, PriorityQueue


def test_queue_is_fifo():
    q = LinkedQueue()
    for value in (1, 2, 3):
        q.enqueue(value)
    assert len(q) == 3
    assert [q.dequeue(), q.dequeue(), q.dequeue()] == [1, 2, 3]
    assert q.is_empty()


def test_queue_peek_keeps_item():
    q = LinkedQueue([7, 8])
    assert q.peek() == 7
    assert len(q) == 2
    assert list(q) == [7, 8]


def test_queue_empty_errors():
    q = LinkedQueue()
    with pytest.raises(IndexError):
        q.dequeue()
    with pytest.raises(IndexError):
        q.peek()


def test_queue_copy_is_independent():
    original = LinkedQueue(["a", "b"])
    copy = LinkedQueue(original)
    copy.dequeue()
    assert list(original) == ["a", "b"]
    assert list(copy) == ["b"]


def test_queue_str_joins_items():
    assert str(LinkedQueue([1, 2, 3])) == "1, 2, 3"
    assert str(LinkedQueue()) == ""


def test_stack_is_lifo():
    s = ArrayStack()
    for value in ("x", "y", "z"):
        s.push(value)
    assert s.peek() == "z"
    assert list(s) == ["z", "y", "x"]
    assert str(s) == "z, y, x"
    assert s.pop() == "z"
    assert len(s) == 2


def test_stack_empty_errors():
    s = ArrayStack()
    assert s.is_empty()
    with pytest.raises(IndexError):
        s.pop()
    with pytest.raises(IndexError):
        s.peek()


def test_stack_capacity():
    s = ArrayStack()
    for value in range(ArrayStack.MAX_SIZE):
        s.push(value)
    assert len(s) == 1000
    with pytest.raises(OverflowError):
        s.push(-1)
    assert s.peek() == ArrayStack.MAX_SIZE - 1


def test_priority_queue_orders_by_descending_priority():
    pq = PriorityQueue()
    pq.enqueue("low", 1)
    pq.enqueue("high", 10)
    pq.enqueue("mid", 5)
    assert list(pq) == ["high", "mid", "low"]
    assert pq.dequeue() == ("high", 10)
    assert pq.peek() == ("mid", 5)
    assert len(pq) == 2


def test_priority_queue_equal_priorities_keep_arrival_order():
    pq = PriorityQueue()
    pq.enqueue("first", -3)
    pq.enqueue("second", -3)
    pq.enqueue("third", -3)
    pq.enqueue("top", 0)
    assert list(pq) == ["top", "first", "second", "third"]
    assert str(pq) == "top, first, second, third"


def test_priority_queue_drains_sorted():
    pq = PriorityQueue()
    priorities = [4, -2, 9, 0, 4, -7]
    for index, priority in enumerate(priorities):
        pq.enqueue(index, priority)
    drained = []
    while not pq.is_empty():
        drained.append(pq.dequeue()[1])
    assert drained == sorted(priorities, reverse=True)


def test_priority_queue_empty_errors():
    pq = PriorityQueue()
    with pytest.raises(IndexError):
        pq.dequeue()
    with pytest.raises(IndexError):
        pq.peek()