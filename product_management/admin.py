from django.contrib import admin
from mptt.admin import DraggableMPTTAdmin

from .models import Product, ProductMedia, Category


class ProductMediaInline(admin.TabularInline):
    model = ProductMedia
    extra = 1
    fields = ('image', 'position')


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'price', 'category', 'seller', 'created_at')
    list_filter = ('created_at', 'category')
    search_fields = ('title', 'description', 'seller__email')
    ordering = ('-id',)
    readonly_fields = ('seller',)
    inlines = [ProductMediaInline]

    def get_readonly_fields(self, request, obj=None):
        # The seller can be picked when adding but never changed afterwards.
        if obj is None:
            return ()
        return self.readonly_fields


@admin.register(Category)
class CategoryAdmin(DraggableMPTTAdmin):
    mptt_indent_field = "name"
    list_display = ('tree_actions', 'indented_title', 'slug')
    search_fields = ('name',)
