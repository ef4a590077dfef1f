from django.contrib import admin

from .forms import InternalLinkRuleForm
from .models import BlogPost, InternalLinkRule


@admin.register(BlogPost)
class BlogPostAdmin(admin.ModelAdmin):
    list_display = ('title', 'slug', 'is_published', 'published_at', 'updated_at')
    list_filter = ('is_published',)
    search_fields = ('title', 'slug', 'excerpt')
    prepopulated_fields = {'slug': ('title',)}


@admin.register(InternalLinkRule)
class InternalLinkRuleAdmin(admin.ModelAdmin):
    form = InternalLinkRuleForm
    list_display = ('keyword', 'target_url', 'site', 'priority', 'max_links_per_page', 'match_type', 'is_active')
    list_filter = ('site', 'match_type', 'is_active', 'nofollow')
    search_fields = ('keyword', 'target_url', 'title')
    list_editable = ('is_active',)
