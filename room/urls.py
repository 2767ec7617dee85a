from rest_framework.routers import DefaultRouter

from room.views import RoomBlockViewSet, RoomTypeViewSet, SeasonalPriceOverrideViewSet

app_name = "room"

router = DefaultRouter()
router.register("room-types", RoomTypeViewSet, basename="room-types")
router.register("seasonal-pricing", SeasonalPriceOverrideViewSet, basename="seasonal-pricing")
router.register("room-blocks", RoomBlockViewSet, basename="room-blocks")

urlpatterns = router.urls
