"""核心领域对象测试"""
from decimal import Decimal

import pytest

from core.domain import DomainEvent, DomainEvents, Money


class SampleEvent(DomainEvent):
    pass


class TestMoney:

    def test_addition_and_multiplication(self):
        total = Money("20.00") * 3 + Money("0.50")

        assert total == Money(Decimal("60.50"), "CNY")
        assert str(total) == "CNY 60.50"

    def test_cannot_add_different_currencies(self):
        with pytest.raises(ValueError):
            Money("1.00", "CNY") + Money("1.00", "USD")

    def test_to_dict(self):
        assert Money("9.90", "USD").to_dict() == {"amount": "9.90", "currency": "USD"}


class TestDomainEvents:

    @pytest.fixture(autouse=True)
    def cleanup(self):
        yield
        DomainEvents._handlers.pop(SampleEvent, None)

    def test_handler_registered_once(self):
        received = []
        handler = received.append

        DomainEvents.register(SampleEvent, handler)
        DomainEvents.register(SampleEvent, handler)
        DomainEvents.publish(SampleEvent())

        assert len(received) == 1

    def test_failing_handler_does_not_stop_others(self):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        DomainEvents.register(SampleEvent, broken)
        DomainEvents.register(SampleEvent, received.append)
        DomainEvents.publish(SampleEvent())

        assert len(received) == 1

    def test_unregister(self):
        received = []
        DomainEvents.register(SampleEvent, received.append)
        DomainEvents.unregister(SampleEvent, received.append)

        DomainEvents.publish(SampleEvent())

        assert received == []
