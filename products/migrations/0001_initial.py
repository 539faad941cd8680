import uuid

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='商品名称')),
                ('description', models.TextField(blank=True, verbose_name='商品描述')),
                ('category', models.CharField(choices=[('Tops', '上装'), ('Bottoms', '下装'), ('Dresses', '连衣裙'), ('Outerwear', '外套'), ('Accessories', '配饰')], default='Tops', max_length=20, verbose_name='商品分类')),
                ('collection', models.CharField(default='Summer Collection', max_length=100, verbose_name='所属系列')),
                ('color', models.CharField(blank=True, max_length=50, verbose_name='颜色')),
                ('featured', models.BooleanField(default=False, verbose_name='是否推荐')),
                ('price_amount', models.DecimalField(decimal_places=2, max_digits=10, verbose_name='价格金额')),
                ('price_currency', models.CharField(default='CNY', max_length=3, verbose_name='价格货币')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
            ],
            options={
                'verbose_name': '商品',
                'verbose_name_plural': '商品',
                'db_table': 'product',
                'indexes': [
                    models.Index(fields=['name'], name='idx_product_name'),
                    models.Index(fields=['category'], name='idx_product_category'),
                    models.Index(fields=['collection'], name='idx_product_collection'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(price_amount__gte=0), name='price_amount_gte_0'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ProductStock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('size', models.CharField(choices=[('XS', 'XS'), ('S', 'S'), ('M', 'M'), ('L', 'L'), ('XL', 'XL'), ('XXL', 'XXL')], max_length=3, verbose_name='尺码')),
                ('quantity', models.PositiveIntegerField(default=0, verbose_name='库存数量')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='stock', to='products.product', verbose_name='商品')),
            ],
            options={
                'verbose_name': '商品库存',
                'verbose_name_plural': '商品库存',
                'db_table': 'product_stock',
                'ordering': ['id'],
                'constraints': [
                    models.UniqueConstraint(fields=('product', 'size'), name='uniq_product_stock_size'),
                    models.CheckConstraint(condition=models.Q(quantity__gte=0), name='stock_quantity_gte_0'),
                ],
            },
        ),
    ]
