"""
商品基础设施层数据库模型。
定义商品及其按尺码划分的库存台账的Django ORM模型。
"""
import uuid
from django.db import models


class Product(models.Model):
    """商品数据库模型"""
    
    class CategoryChoices(models.TextChoices):
        TOPS = 'Tops', '上装'
        BOTTOMS = 'Bottoms', '下装'
        DRESSES = 'Dresses', '连衣裙'
        OUTERWEAR = 'Outerwear', '外套'
        ACCESSORIES = 'Accessories', '配饰'
    
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, verbose_name="商品名称")
    description = models.TextField(blank=True, verbose_name="商品描述")
    category = models.CharField(
        max_length=20,
        choices=CategoryChoices.choices,
        default=CategoryChoices.TOPS,
        verbose_name="商品分类"
    )
    collection = models.CharField(
        max_length=100,
        default="Summer Collection",
        verbose_name="所属系列"
    )
    color = models.CharField(max_length=50, blank=True, verbose_name="颜色")
    featured = models.BooleanField(default=False, verbose_name="是否推荐")
    price_amount = models.DecimalField(
        max_digits=10, 
        decimal_places=2, 
        verbose_name="价格金额"
    )
    price_currency = models.CharField(
        max_length=3, 
        default="CNY", 
        verbose_name="价格货币"
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="创建时间")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")
    
    class Meta:
        db_table = 'product'
        verbose_name = "商品"
        verbose_name_plural = "商品"
        indexes = [
            models.Index(fields=['name'], name='idx_product_name'),
            models.Index(fields=['category'], name='idx_product_category'),
            models.Index(fields=['collection'], name='idx_product_collection'),
        ]
        constraints = [
            # 确保价格不为负数
            models.CheckConstraint(condition=models.Q(price_amount__gte=0), name='price_amount_gte_0'),
        ]
    
    def __str__(self):
        return self.name


class ProductStock(models.Model):
    """商品尺码库存数据库模型，每个商品每个尺码一行"""
    
    class SizeChoices(models.TextChoices):
        XS = 'XS', 'XS'
        S = 'S', 'S'
        M = 'M', 'M'
        L = 'L', 'L'
        XL = 'XL', 'XL'
        XXL = 'XXL', 'XXL'
    
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='stock',
        verbose_name="商品"
    )
    size = models.CharField(max_length=3, choices=SizeChoices.choices, verbose_name="尺码")
    quantity = models.PositiveIntegerField(default=0, verbose_name="库存数量")
    updated_at = models.DateTimeField(auto_now=True, verbose_name="更新时间")
    
    class Meta:
        db_table = 'product_stock'
        verbose_name = "商品库存"
        verbose_name_plural = "商品库存"
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['product', 'size'], name='uniq_product_stock_size'),
            models.CheckConstraint(condition=models.Q(quantity__gte=0), name='stock_quantity_gte_0'),
        ]
    
    def __str__(self):
        return f"{self.product.name} {self.size}: {self.quantity}"
