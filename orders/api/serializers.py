"""
订单API序列化器。
请求字段使用驼峰命名，同时接受下划线命名的别名。
"""
from rest_framework import serializers

from orders.domain.entities import ORDER_STATUSES
from products.api.serializers import MoneySerializer
from products.domain.entities import SIZES


def apply_aliases(data, aliases):
    """将下划线命名的字段名替换为驼峰命名"""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for alias, name in aliases.items():
        if name not in data and alias in data:
            data[name] = data.pop(alias)
    return data


class OrderItemInputSerializer(serializers.Serializer):
    """下单商品行序列化器"""
    product = serializers.UUIDField()
    size = serializers.ChoiceField(choices=SIZES)
    quantity = serializers.IntegerField(min_value=1)
    
    def to_internal_value(self, data):
        data = apply_aliases(data, {'product_id': 'product', 'productId': 'product'})
        return super().to_internal_value(data)


class PlaceOrderSerializer(serializers.Serializer):
    """
    下单请求序列化器。
    商品行为空时由领域层返回空订单错误。
    """
    items = OrderItemInputSerializer(many=True, required=False, allow_empty=True)
    shippingAddress = serializers.DictField()
    contactInfo = serializers.DictField()
    
    def to_internal_value(self, data):
        data = apply_aliases(data, {
            'shipping_address': 'shippingAddress',
            'contact_info': 'contactInfo',
        })
        return super().to_internal_value(data)


class UpdateOrderStatusSerializer(serializers.Serializer):
    """更新订单状态请求序列化器"""
    status = serializers.ChoiceField(choices=ORDER_STATUSES)


class ProductSummarySerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    price = MoneySerializer()


class OrderItemSerializer(serializers.Serializer):
    """订单商品行响应序列化器"""
    productId = serializers.CharField(source='product_id')
    product = ProductSummarySerializer(allow_null=True)
    size = serializers.CharField()
    quantity = serializers.IntegerField()
    unitPrice = MoneySerializer(source='unit_price')
    lineTotal = MoneySerializer(source='line_total')
    stockApplied = serializers.BooleanField(source='stock_applied')


class OrderSerializer(serializers.Serializer):
    """订单响应序列化器"""
    id = serializers.UUIDField()
    userId = serializers.CharField(source='user_id')
    items = OrderItemSerializer(many=True)
    total = MoneySerializer()
    shippingAddress = serializers.DictField(source='shipping_address')
    contactInfo = serializers.DictField(source='contact_info')
    status = serializers.CharField()
    stockApplied = serializers.BooleanField(source='fully_applied')
    createdAt = serializers.DateTimeField(source='created_at')
    updatedAt = serializers.DateTimeField(source='updated_at')
