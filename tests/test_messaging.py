import pytest

from prosim.context import Context
from prosim.messaging import MessageFacility


def at_first_op(text, pid):
    proc = Context.load(text.split())
    proc.pid = pid
    proc.next_op()
    return proc


@pytest.fixture
def facility():
    return MessageFacility()


def sender_to(node, process, pid=1, thread=1):
    return at_first_op(f"s 2 0 {thread} SEND {node * 100 + process} HALT", pid)


def receiver_from(node, process, pid=1, thread=2):
    return at_first_op(f"r 2 0 {thread} RECV {node * 100 + process} HALT", pid)


def test_send_without_receiver_waits(facility):
    sender = sender_to(2, 1)
    assert facility.send(sender, 2, 1) is None
    assert facility.pending()
    assert facility.take_completed() == []
    assert list(facility.send_queue) == [sender]


def test_recv_matches_waiting_sender(facility):
    sender = sender_to(2, 1)
    receiver = receiver_from(1, 1)
    facility.send(sender, 2, 1)
    assert facility.recv(receiver, 1, 1) is sender
    done = facility.take_completed()
    assert done[0] is receiver and done[1] is sender
    assert not facility.pending()


def test_send_matches_waiting_receiver(facility):
    sender = sender_to(2, 1)
    receiver = receiver_from(1, 1)
    assert facility.recv(receiver, 1, 1) is None
    assert facility.send(sender, 2, 1) is receiver
    done = facility.take_completed()
    assert done[0] is sender and done[1] is receiver
    assert not facility.pending()


def test_mismatched_address_keeps_both_waiting(facility):
    sender = sender_to(2, 1)
    receiver = receiver_from(3, 1)
    facility.send(sender, 2, 1)
    assert facility.recv(receiver, 3, 1) is None
    assert facility.pending()
    assert list(facility.send_queue) == [sender]
    assert list(facility.recv_queue) == [receiver]


def test_skipped_waiters_are_kept(facility):
    first = sender_to(2, 1, pid=1)
    second = sender_to(2, 2, pid=2)
    facility.send(first, 2, 1)
    facility.send(second, 2, 2)
    receiver_two = receiver_from(1, 2, pid=2)
    assert facility.recv(receiver_two, 1, 2) is second
    assert list(facility.send_queue) == [first]
    receiver_one = receiver_from(1, 1, pid=1)
    assert facility.recv(receiver_one, 1, 1) is first
    assert facility.send_queue.__len__() == 0


def test_completed_ordered_by_process_id(facility):
    receiver = receiver_from(1, 2, pid=1)
    sender = sender_to(2, 1, pid=2)
    facility.recv(receiver, 1, 2)
    facility.send(sender, 2, 1)
    done = facility.take_completed()
    assert [proc.pid for proc in done] == sorted(proc.pid for proc in done)
    assert done[0] is receiver