from django.contrib import admin
from .models import User, HomeOwner, Housekeeper

@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'phone_number', 'is_homeowner', 'is_housekeeper', 'is_superuser', 'is_verified')
    list_filter = ('is_superuser', 'is_verified')
    search_fields = ('username', 'email', 'phone_number')

@admin.register(HomeOwner)
class HomeOwnerAdmin(admin.ModelAdmin):
    list_display = ('user', 'city_municipality')
    search_fields = ('user__username', 'user__email')

@admin.register(Housekeeper)
class HousekeeperAdmin(admin.ModelAdmin):
    list_display = ('user', 'location', 'account_active', 'documents_submitted_at')
    list_filter = ('account_active',)
    search_fields = ('user__username', 'user__email')
