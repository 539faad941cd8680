"""
商品API序列化器。
"""
from rest_framework import serializers


class MoneySerializer(serializers.Serializer):
    """金额值对象序列化器"""
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField(max_length=3)
    
    def to_representation(self, instance):
        """
        确保能够处理字典或具有amount和currency属性的对象
        """
        if isinstance(instance, dict):
            data = instance
        else:
            data = {'amount': instance.amount, 'currency': instance.currency}
        return super().to_representation(data)


class StockEntrySerializer(serializers.Serializer):
    """尺码库存序列化器"""
    size = serializers.CharField()
    quantity = serializers.IntegerField()


class ProductStockSerializer(serializers.Serializer):
    """商品库存响应序列化器"""
    id = serializers.UUIDField()
    name = serializers.CharField()
    price = MoneySerializer()
    stock = StockEntrySerializer(many=True)
