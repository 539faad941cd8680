"""默认管理员初始化命令测试"""
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError

User = get_user_model()


@pytest.mark.django_db
class TestEnsureAdmin:

    def test_creates_superuser(self):
        call_command('ensure_admin', '--email', 'admin@example.com', '--password', 'secret123', stdout=StringIO())

        admin = User.objects.get(email='admin@example.com')
        assert admin.is_superuser
        assert admin.is_staff
        assert admin.check_password('secret123')

    def test_is_idempotent(self):
        call_command('ensure_admin', '--email', 'admin@example.com', '--password', 'secret123', stdout=StringIO())
        out = StringIO()
        call_command('ensure_admin', '--email', 'admin@example.com', '--password', 'changed', stdout=out)

        assert "管理员账号已存在" in out.getvalue()
        assert User.objects.filter(email='admin@example.com').count() == 1
        assert User.objects.get(email='admin@example.com').check_password('secret123')

    def test_uses_settings_defaults(self, settings):
        settings.DEFAULT_ADMIN_EMAIL = 'root@example.com'
        settings.DEFAULT_ADMIN_PASSWORD = 'from-settings'

        call_command('ensure_admin', stdout=StringIO())

        assert User.objects.get(email='root@example.com').check_password('from-settings')

    def test_requires_password(self, settings):
        settings.DEFAULT_ADMIN_PASSWORD = ''

        with pytest.raises(CommandError):
            call_command('ensure_admin', '--email', 'admin@example.com')
