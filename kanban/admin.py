"""
Django Admin Configuration for the Kanban planner
"""
from django.contrib import admin
from django.utils.html import format_html
from .models import Project, Column, Task, TodayEntry


class ColumnInline(admin.TabularInline):
    model = Column
    fields = ['name', 'order']
    ordering = ['order']
    extra = 0


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ['name', 'author', 'color_swatch', 'sidebar_order', 'created_at']
    list_filter = ['author']
    search_fields = ['name', 'description']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['author', 'sidebar_order']
    inlines = [ColumnInline]

    def color_swatch(self, obj):
        return format_html(
            '<span style="background-color: {}; padding: 3px 10px; border-radius: 3px;">&nbsp;</span> {}',
            obj.color,
            obj.color
        )
    color_swatch.short_description = 'Color'


@admin.register(Column)
class ColumnAdmin(admin.ModelAdmin):
    list_display = ['name', 'project', 'order', 'is_done']
    list_filter = ['project']
    search_fields = ['name', 'project__name']
    ordering = ['project', 'order']

    def is_done(self, obj):
        return obj.is_done
    is_done.boolean = True


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ['title', 'project', 'column', 'order', 'updated_at']
    list_filter = ['project', 'column']
    search_fields = ['title', 'description']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['project', 'column__order', 'order']


@admin.register(TodayEntry)
class TodayEntryAdmin(admin.ModelAdmin):
    list_display = ['task', 'owner', 'order', 'added_at']
    list_filter = ['owner']
    ordering = ['owner', 'order']
