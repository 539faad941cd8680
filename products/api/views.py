"""
商品API视图。
提供商品价格和库存的只读接口。
"""
import logging
import uuid

from rest_framework import status
from rest_framework.permissions import AllowAny

from core.domain.exceptions import ProductNotFoundException
from core.infrastructure.api_view import ApiBaseView
from core.infrastructure.response import StatusCode
from products.application import ProductApplicationService, GetProductStockQuery
from products.api.serializers import ProductStockSerializer
from products.infrastructure.factory import ProductInfrastructureFactory

logger = logging.getLogger(__name__)


def get_product_service() -> ProductApplicationService:
    """获取商品应用服务实例"""
    factory = ProductInfrastructureFactory()
    return ProductApplicationService(
        product_repository=factory.create_product_repository()
    )


class ProductStockView(ApiBaseView):
    """商品库存查询接口"""
    permission_classes = [AllowAny]
    
    def get(self, request, product_id: uuid.UUID):
        """获取商品价格和各尺码库存"""
        try:
            product = get_product_service().get_product_stock(GetProductStockQuery(id=product_id))
        except ProductNotFoundException as e:
            return self.failed_response(
                message=str(e),
                code=StatusCode.PRODUCT_NOT_FOUND,
                http_code=status.HTTP_404_NOT_FOUND
            )
        
        return self.success_response(
            data=ProductStockSerializer(product).data,
            message="获取商品库存成功"
        )
