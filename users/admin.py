from django.contrib import admin
from .models import User
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _


class CustomUserAdmin(BaseUserAdmin):
    model = User

    # Show on list view (table)
    list_display = (
        "id", "email", "full_username", "is_active", "is_staff", "is_superuser"
    )

    # Make 'id' read-only in admin form
    readonly_fields = ("id",)

    # Customize fieldsets for detail view
    fieldsets = (
        (None, {
            "fields": ("id", "email", "password")
        }),
        (_("Personal info"), {
            "fields": ("first_name", "last_name", "full_username")
        }),
        (_("Permissions"), {
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions"),
        }),
        (_("Important dates"), {
            "fields": ("last_login", "date_joined"),
        }),
    )

    # Fields shown when creating a new user via admin
    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "full_username", "password1", "password2"),
        }),
    )

    search_fields = ("email", "full_username")
    ordering = ("email",)


admin.site.register(User, CustomUserAdmin)
