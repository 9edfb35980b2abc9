from django.contrib import admin
from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ('title', 'student', 'category', 'status', 'verified_by', 'verified_at', 'date')
    list_filter = ('status', 'category', 'date')
    search_fields = ('title', 'description', 'student__email')
    date_hierarchy = 'date'
    # Status changes go through the state machine (PATCH .../status/)
    readonly_fields = (
        'status', 'verified_by', 'verified_at',
        'certificate_token', 'qr_code', 'certificate_issued_at',
        'created_at', 'updated_at',
    )

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return ('student',) + self.readonly_fields
        return self.readonly_fields
