"""
默认管理员初始化命令。
幂等：账号已存在时不做任何修改。
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from loguru import logger


class Command(BaseCommand):
    help = "创建默认管理员账号（如果不存在）"

    def add_arguments(self, parser):
        parser.add_argument('--email', default=None, help="管理员邮箱，默认读取 DEFAULT_ADMIN_EMAIL")
        parser.add_argument('--password', default=None, help="管理员密码，默认读取 DEFAULT_ADMIN_PASSWORD")

    def handle(self, *args, **options):
        email = options['email'] or getattr(settings, 'DEFAULT_ADMIN_EMAIL', '')
        password = options['password'] or getattr(settings, 'DEFAULT_ADMIN_PASSWORD', '')
        if not email:
            raise CommandError("未配置管理员邮箱")

        User = get_user_model()
        if User.objects.filter(email=email).exists():
            self.stdout.write(f"管理员账号已存在: {email}")
            return

        if not password:
            raise CommandError("未配置管理员密码，请设置 DEFAULT_ADMIN_PASSWORD 或使用 --password")

        User.objects.create_superuser(username=email, email=email, password=password)
        logger.info(f"已创建默认管理员账号: {email}")
        self.stdout.write(self.style.SUCCESS(f"已创建默认管理员账号: {email}"))
