"""库存扣减测试"""
import pytest

from core.domain.exceptions import StockRaceException
from products.infrastructure.services.stock_adjuster import DjangoStockAdjuster


@pytest.mark.django_db
class TestDjangoStockAdjuster:

    def test_decrement_returns_remaining_quantity(self, make_product, stock_of):
        product = make_product(stock={"M": 5, "S": 4})

        remaining = DjangoStockAdjuster().decrement(product.id, "M", 3)

        assert remaining == 2
        assert stock_of(product, "M") == 2
        assert stock_of(product, "S") == 4

    def test_decrement_to_zero(self, make_product, stock_of):
        product = make_product(stock={"M": 2})

        assert DjangoStockAdjuster().decrement(product.id, "M", 2) == 0
        assert stock_of(product, "M") == 0

    def test_insufficient_live_stock_raises_race(self, make_product, stock_of):
        product = make_product(stock={"M": 2})

        with pytest.raises(StockRaceException) as exc_info:
            DjangoStockAdjuster().decrement(product.id, "M", 3)

        assert exc_info.value.size == "M"
        assert stock_of(product, "M") == 2

    def test_missing_size_raises_race(self, make_product):
        product = make_product(stock={"M": 5})

        with pytest.raises(StockRaceException):
            DjangoStockAdjuster().decrement(product.id, "L", 1)

    def test_quantity_must_be_positive(self, make_product):
        product = make_product(stock={"M": 5})

        with pytest.raises(ValueError):
            DjangoStockAdjuster().decrement(product.id, "M", 0)
