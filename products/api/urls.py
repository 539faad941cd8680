"""
商品API URL配置。
"""
from django.urls import path
from products.api import views

urlpatterns = [
    path('products/<uuid:product_id>/stock/', views.ProductStockView.as_view(), name='product-stock'),
]
