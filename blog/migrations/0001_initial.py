import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='BlogPost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=300)),
                ('slug', models.SlugField(max_length=255, unique=True)),
                ('excerpt', models.TextField(blank=True)),
                ('content', models.JSONField(blank=True, default=dict)),
                ('meta_title', models.CharField(blank=True, max_length=300)),
                ('meta_description', models.TextField(blank=True)),
                ('canonical_url', models.URLField(blank=True)),
                ('is_published', models.BooleanField(db_index=True, default=False)),
                ('published_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-published_at', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='InternalLinkRule',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('site', models.CharField(blank=True, db_index=True, help_text='Domain this rule applies to. Leave blank to apply to every site.', max_length=255)),
                ('keyword', models.CharField(db_index=True, max_length=255)),
                ('target_url', models.CharField(help_text='Target URL (e.g. /blogs/nextjs-guide).', max_length=500)),
                ('title', models.CharField(blank=True, help_text='Optional tooltip.', max_length=300)),
                ('nofollow', models.BooleanField(default=False)),
                ('priority', models.PositiveSmallIntegerField(default=10, help_text='Higher priorities are applied first (0-100).', validators=[django.core.validators.MaxValueValidator(100)])),
                ('max_links_per_page', models.PositiveSmallIntegerField(default=2, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(10)])),
                ('match_type', models.CharField(choices=[('word', 'Word (exact)'), ('phrase', 'Phrase (exact)'), ('regex', 'Regex (advanced)')], default='word', max_length=10)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-priority', 'keyword'],
            },
        ),
    ]
