"""测试共用夹具"""
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from products.infrastructure.models.product_models import Product, ProductStock

User = get_user_model()


@pytest.fixture
def customer(db):
    """普通顾客"""
    return User.objects.create_user(
        username="customer",
        email="customer@example.com",
        password="testpass123",
    )


@pytest.fixture
def other_customer(db):
    return User.objects.create_user(
        username="another",
        email="another@example.com",
        password="testpass123",
    )


@pytest.fixture
def staff_user(db):
    """管理员"""
    return User.objects.create_user(
        username="staff",
        email="staff@example.com",
        password="testpass123",
        is_staff=True,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_product(db):
    """创建商品及其尺码库存"""
    def _make(name="基础T恤", price="20.00", stock=None):
        product = Product.objects.create(name=name, price_amount=Decimal(price))
        for size, quantity in (stock or {}).items():
            ProductStock.objects.create(product=product, size=size, quantity=quantity)
        return product
    return _make


@pytest.fixture
def stock_of():
    """读取数据库中的实时库存"""
    def _stock_of(product, size):
        return ProductStock.objects.get(product=product, size=size).quantity
    return _stock_of
