from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = (
        "user_id",
        "name",
        "business_name",
        "role",
        "is_banned",
        "created_at",
    )
    list_filter = ("role", "is_verified", "is_banned")
    search_fields = ("user_id", "name", "business_name", "email")
    readonly_fields = ("user_id", "created_at", "updated_at")
