from django.contrib import admin

from room.models import RoomBlock, RoomType, SeasonalPriceOverride


@admin.register(RoomType)
class RoomTypeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "total_rooms", "base_price", "max_occupancy", "active")
    search_fields = ("name",)
    list_filter = ("active", "max_occupancy")


@admin.register(SeasonalPriceOverride)
class SeasonalPriceOverrideAdmin(admin.ModelAdmin):
    list_display = ("id", "room_type", "start_date", "end_date", "override_price", "active")
    list_filter = ("active", "room_type")
    ordering = ("-start_date",)


@admin.register(RoomBlock)
class RoomBlockAdmin(admin.ModelAdmin):
    list_display = ("id", "room_type", "start_date", "end_date", "blocked_rooms", "reason", "active")
    list_filter = ("reason", "active", "room_type")
    ordering = ("-start_date",)
