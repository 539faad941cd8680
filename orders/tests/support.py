"""订单测试辅助数据和替身"""
from products.domain.repositories import ProductRepository

SHIPPING_ADDRESS = {"street": "南京路100号", "city": "上海", "postalCode": "200001", "country": "中国"}
CONTACT_INFO = {"email": "customer@example.com", "phone": "13800000000"}


class SnapshotProductRepository(ProductRepository):
    """返回固定快照的商品仓储，用于模拟校验后库存被并发订单抢先扣减"""

    def __init__(self, products):
        self.products = {str(p.id): p for p in products}

    def get_by_id(self, id):
        return self.products.get(str(id))

    def get_by_ids(self, ids):
        return {str(i): self.products[str(i)] for i in ids if str(i) in self.products}
