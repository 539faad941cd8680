"""
订单API URL配置。
"""
from django.urls import path
from orders.api import views

urlpatterns = [
    path('orders/', views.OrderListCreateView.as_view(), name='order-list'),
    path('orders/all/', views.AllOrdersView.as_view(), name='order-all'),
    path('orders/<uuid:order_id>/', views.OrderDetailView.as_view(), name='order-detail'),
    path('orders/<uuid:order_id>/status/', views.OrderStatusView.as_view(), name='order-status'),
]
