"""
库存对账命令。
对已创建但库存未扣减的订单商品行重新扣减库存。
"""
from django.core.management.base import BaseCommand, CommandError
from loguru import logger

from core.domain import OrderNotFoundException
from orders.application import ReconcileStockCommand
from orders.infrastructure.factory import OrderInfrastructureFactory


class Command(BaseCommand):
    help = "对库存未扣减的订单商品行重新扣减库存"

    def add_arguments(self, parser):
        parser.add_argument('--order', default=None, help="只处理指定订单ID")
        parser.add_argument('--dry-run', action='store_true', help="只列出待扣减的商品行，不做修改")

    def handle(self, *args, **options):
        service = OrderInfrastructureFactory().create_order_service()
        command = ReconcileStockCommand(order_id=options['order'], dry_run=options['dry_run'])
        try:
            results = service.reconcile_stock(command)
        except OrderNotFoundException as e:
            raise CommandError(str(e))

        if not results:
            self.stdout.write("没有需要对账的订单")
            return

        unresolved = 0
        for result in results:
            if result.skipped:
                self.stdout.write(f"订单 {result.order_id}: 已取消，跳过")
            elif command.dry_run:
                self.stdout.write(f"订单 {result.order_id}: 待扣减 {result.pending_before} 行")
                for line in result.remaining_races:
                    self.stdout.write(f"  - 商品 {line['productId']} 尺码 {line['size']} 数量 {line['quantity']}")
            elif result.resolved:
                self.stdout.write(self.style.SUCCESS(
                    f"订单 {result.order_id}: 已扣减 {result.pending_before} 行"
                ))
            else:
                unresolved += 1
                self.stdout.write(self.style.WARNING(
                    f"订单 {result.order_id}: 仍有 {len(result.remaining_races)} 行库存不足"
                ))
                for line in result.remaining_races:
                    self.stdout.write(f"  - {line['message']}")

        if unresolved:
            logger.warning(f"库存对账后仍有{unresolved}个订单未完成扣减")
