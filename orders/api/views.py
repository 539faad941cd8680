"""
订单API视图。
领域异常由统一异常处理器转换为响应。
"""
import logging
import uuid

from rest_framework.permissions import IsAdminUser, IsAuthenticated

from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.response import StatusCode
from orders.api.serializers import OrderSerializer, PlaceOrderSerializer, UpdateOrderStatusSerializer
from orders.application import (
    GetOrderQuery,
    ListAllOrdersQuery,
    ListUserOrdersQuery,
    OrderApplicationService,
    PlaceOrderCommand,
    UpdateOrderStatusCommand,
)
from orders.infrastructure.factory import OrderInfrastructureFactory

logger = logging.getLogger(__name__)


def get_order_service() -> OrderApplicationService:
    """获取订单应用服务实例"""
    return OrderInfrastructureFactory().create_order_service()


class OrderListCreateView(ApiBaseView):
    """当前用户的订单列表和下单接口"""
    permission_classes = [IsAuthenticated]
    
    def get(self, request):
        orders = get_order_service().list_user_orders(ListUserOrdersQuery(user_id=request.user.id))
        return self.success_response(
            data=OrderSerializer(orders, many=True).data,
            message="获取订单列表成功"
        )
    
    def post(self, request):
        """
        下单。
        订单创建后某些商品行的库存未能扣减时，仍返回201，
        并在metadata.stockWarnings中列出这些商品行。
        """
        serializer = PlaceOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return self.failed_response(
                message="订单数据无效",
                code=StatusCode.VALIDATION_ERROR,
                data=serializer.errors
            )
        
        data = serializer.validated_data
        command = PlaceOrderCommand(
            user_id=request.user.id,
            items=[
                {
                    'product_id': item['product'],
                    'size': item['size'],
                    'quantity': item['quantity'],
                }
                for item in data.get('items', [])
            ],
            shipping_address=data['shippingAddress'],
            contact_info=data['contactInfo'],
        )
        result = get_order_service().place_order(command)
        
        metadata = None
        if result.stock_warnings:
            logger.warning(f"订单{result.order.id}存在未扣减库存的商品行: {len(result.stock_warnings)}")
            metadata = {'stockWarnings': result.stock_warnings}
        
        return self.created_response(
            data=OrderSerializer(result.order).data,
            message="下单成功",
            metadata=metadata
        )


class AllOrdersView(ApiBaseView):
    """全部订单列表接口，仅管理员可用"""
    permission_classes = [IsAuthenticated, IsAdminUser]
    
    def get(self, request):
        orders = get_order_service().list_all_orders(ListAllOrdersQuery())
        return self.success_response(
            data=OrderSerializer(orders, many=True).data,
            message="获取全部订单成功"
        )


class OrderDetailView(ApiBaseView):
    """订单详情接口，下单用户本人和管理员可查看"""
    permission_classes = [IsAuthenticated]
    
    def get(self, request, order_id: uuid.UUID):
        order = get_order_service().get_order(GetOrderQuery(
            order_id=order_id,
            user_id=request.user.id,
            is_admin=request.user.is_staff,
        ))
        return self.success_response(
            data=OrderSerializer(order).data,
            message="获取订单详情成功"
        )


class OrderStatusView(ApiBaseView):
    """订单状态更新接口，仅管理员可用"""
    permission_classes = [IsAuthenticated, IsAdminUser]
    
    def patch(self, request, order_id: uuid.UUID):
        serializer = UpdateOrderStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return self.failed_response(
                message="订单状态无效",
                code=StatusCode.VALIDATION_ERROR,
                data=serializer.errors
            )
        
        order = get_order_service().update_order_status(UpdateOrderStatusCommand(
            order_id=order_id,
            status=serializer.validated_data['status'],
        ))
        return self.success_response(
            data=OrderSerializer(order).data,
            message="订单状态已更新",
            code=StatusCode.UPDATED
        )
