"""
订单基础设施层数据库模型。
订单创建后商品行和总金额不再修改。
"""
import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone

from products.infrastructure.models.product_models import Product, ProductStock


class Order(models.Model):
    """订单数据库模型"""
    
    class StatusChoices(models.TextChoices):
        PENDING = 'pending', '待处理'
        PROCESSING = 'processing', '处理中'
        SHIPPED = 'shipped', '已发货'
        DELIVERED = 'delivered', '已送达'
        CANCELLED = 'cancelled', '已取消'
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name="下单用户"
    )
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, verbose_name="订单总金额")
    currency = models.CharField(max_length=3, default="CNY", verbose_name="货币")
    shipping_address = models.JSONField(default=dict, verbose_name="收货地址")
    contact_info = models.JSONField(default=dict, verbose_name="联系方式")
    status = models.CharField(
        max_length=20,
        choices=StatusChoices.choices,
        default=StatusChoices.PENDING,
        verbose_name="订单状态"
    )
    version = models.PositiveIntegerField(default=0, verbose_name="版本号")
    created_at = models.DateTimeField(default=timezone.now, editable=False, verbose_name="创建时间")
    updated_at = models.DateTimeField(default=timezone.now, verbose_name="更新时间")
    
    class Meta:
        db_table = 'order'
        verbose_name = "订单"
        verbose_name_plural = "订单"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', '-created_at'], name='idx_order_user_created'),
            models.Index(fields=['status'], name='idx_order_status'),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(total_amount__gte=0), name='order_total_gte_0'),
        ]
    
    def __str__(self):
        return f"订单 {self.id} ({self.status})"


class OrderItem(models.Model):
    """订单商品行数据库模型"""
    
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name="订单"
    )
    position = models.PositiveIntegerField(verbose_name="行位置")
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name='order_items',
        verbose_name="商品"
    )
    size = models.CharField(max_length=3, choices=ProductStock.SizeChoices.choices, verbose_name="尺码")
    quantity = models.PositiveIntegerField(verbose_name="数量")
    unit_price = models.DecimalField(max_digits=10, decimal_places=2, verbose_name="下单单价")
    stock_applied = models.BooleanField(default=False, verbose_name="库存已扣减")
    
    class Meta:
        db_table = 'order_item'
        verbose_name = "订单商品"
        verbose_name_plural = "订单商品"
        ordering = ['position']
        indexes = [
            models.Index(fields=['stock_applied'], name='idx_order_item_stock_applied'),
        ]
        constraints = [
            models.UniqueConstraint(fields=['order', 'position'], name='uniq_order_item_position'),
            models.CheckConstraint(condition=models.Q(quantity__gte=1), name='order_item_quantity_gte_1'),
        ]
    
    def __str__(self):
        return f"{self.product_id} {self.size} x{self.quantity}"
