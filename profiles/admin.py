from django.contrib import admin
from .models import StudentProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'student_id', 'department', 'semester', 'section', 'profile_completed')
    list_filter = ('department', 'semester', 'section', 'profile_completed')
    search_fields = ('full_name', 'student_id', 'user__email')
    readonly_fields = ('profile_completed', 'created_at', 'updated_at')
