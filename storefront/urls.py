"""
URL configuration for storefront project.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    # 商品模块API（库存读取）
    path('', include('products.urls')),
    # 订单模块API
    path('', include('orders.urls')),
]
