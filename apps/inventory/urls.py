from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'inventory'

router = DefaultRouter()
router.register(r'', views.ItemViewSet, basename='item')

urlpatterns = [
    # GET    /api/items/                    - List items (filters: channel, status, active_only, date_from, date_to, search, ordering)
    # POST   /api/items/                    - Log a purchase
    # GET    /api/items/{id}/               - Get item
    # PUT    /api/items/{id}/               - Edit item
    # PATCH  /api/items/{id}/               - Partial edit
    # DELETE /api/items/{id}/               - Delete item
    # POST   /api/items/{id}/receive/       - Pending -> inventory
    # POST   /api/items/{id}/sell/          - Record a direct sale
    # PATCH  /api/items/{id}/sale-details/  - Correct sale details
    path('', include(router.urls)),
]
