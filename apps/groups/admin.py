"""
Admin configuration for the Groups app.
"""
from django.contrib import admin

from apps.groups.models import Group, InviteCode, Membership


class MembershipInline(admin.TabularInline):
    model = Membership
    extra = 0
    readonly_fields = ['created_at']


class InviteCodeInline(admin.TabularInline):
    model = InviteCode
    extra = 0
    readonly_fields = ['code', 'use_count', 'created_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'member_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['name', 'description', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [MembershipInline, InviteCodeInline]


@admin.register(Membership)
class MembershipAdmin(admin.ModelAdmin):
    list_display = ['user', 'group', 'role', 'created_at']
    list_filter = ['role', 'created_at']
    search_fields = ['user__email', 'user__display_name', 'group__name']


@admin.register(InviteCode)
class InviteCodeAdmin(admin.ModelAdmin):
    list_display = ['code', 'group', 'is_active', 'use_count', 'max_uses', 'expires_at']
    list_filter = ['is_active', 'created_at']
    search_fields = ['code', 'group__name']
