from django.contrib import admin

from .models import Career, EngineeringBranch, Option, Programme, Question


class OptionInline(admin.TabularInline):
    model = Option
    extra = 0


@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ['text_short', 'section', 'riasec_code', 'subcategory', 'display_order', 'is_active']
    list_filter = ['section', 'riasec_code', 'subcategory', 'is_active']
    search_fields = ['text']
    ordering = ['display_order', 'id']
    inlines = [OptionInline]
    actions = ['mark_active', 'mark_inactive']

    def text_short(self, obj):
        return obj.text[:80]
    text_short.short_description = 'Question'

    def mark_active(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f'{updated} question(s) activated.')
    mark_active.short_description = "Activate selected questions"

    def mark_inactive(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f'{updated} question(s) deactivated.')
    mark_inactive.short_description = "Deactivate selected questions"


@admin.register(Career)
class CareerAdmin(admin.ModelAdmin):
    list_display = ("title", "stream", "required_codes", "typical_degree", "updated_at")
    list_filter = ("stream",)
    search_fields = ("title", "description")


@admin.register(EngineeringBranch)
class EngineeringBranchAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "broad_work_area")
    prepopulated_fields = {"slug": ("name",)}
    search_fields = ("name",)


@admin.register(Programme)
class ProgrammeAdmin(admin.ModelAdmin):
    list_display = ("full_name", "stream", "degree_type", "branch", "duration_years", "is_active")
    list_filter = ("stream", "degree_type", "is_active")
    search_fields = ("full_name", "short_description")
