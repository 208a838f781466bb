from django.contrib import admin

from .models import Committee, Member, Pastor, Temple


# ──────────────────────────────────────────
# MEMBER / COMMITTEE INLINES (for Temple)
# ──────────────────────────────────────────
class MemberInline(admin.TabularInline):
    model            = Member
    extra            = 0
    fields           = ("first_names", "last_names", "status", "active")
    show_change_link = True


class CommitteeInline(admin.TabularInline):
    model            = Committee
    extra            = 0
    fields           = ("name", "leader", "creation_date")
    show_change_link = True


# ──────────────────────────────────────────
# TEMPLE ADMIN
# ──────────────────────────────────────────
@admin.register(Temple)
class TempleAdmin(admin.ModelAdmin):
    list_display    = ("name", "city", "region", "country", "principal_pastor", "get_member_count")
    list_filter     = ("country", "region")
    search_fields   = ("name", "city", "address")
    ordering        = ("name",)
    # Pastor changes go through the API so the inverse pointer stays in step
    readonly_fields = ("principal_pastor", "created_at", "updated_at")
    inlines         = [MemberInline, CommitteeInline]

    def get_member_count(self, obj):
        return obj.members.filter(active=True).count()
    get_member_count.short_description = "Active members"


# ──────────────────────────────────────────
# PASTOR ADMIN
# ──────────────────────────────────────────
@admin.register(Pastor)
class PastorAdmin(admin.ModelAdmin):
    list_display    = ("last_name", "first_name", "ministerial_license", "status", "temple")
    list_filter     = ("status",)
    search_fields   = ("first_name", "last_name", "email", "ministerial_license")
    ordering        = ("last_name", "first_name")
    readonly_fields = ("temple", "created_at", "updated_at")


# ──────────────────────────────────────────
# MEMBER ADMIN
# ──────────────────────────────────────────
@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display  = ("last_names", "first_names", "email", "status", "temple", "active")
    list_filter   = ("status", "active", "temple")
    search_fields = ("first_names", "last_names", "email", "phone")
    ordering      = ("last_names", "first_names")

    fieldsets = (
        ("Personal", {
            "fields": ("first_names", "last_names", "email", "phone", "birth_date")
        }),
        ("Church", {
            "fields": ("temple", "status", "active", "registration_date", "baptism_date")
        }),
    )


# ──────────────────────────────────────────
# COMMITTEE ADMIN
# ──────────────────────────────────────────
@admin.register(Committee)
class CommitteeAdmin(admin.ModelAdmin):
    list_display  = ("name", "temple", "leader", "creation_date")
    list_filter   = ("temple",)
    search_fields = ("name", "description")
    ordering      = ("name",)
