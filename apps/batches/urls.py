from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'batches'

router = DefaultRouter()
router.register(r'', views.SaleBatchViewSet, basename='batch')

urlpatterns = [
    # GET    /api/batches/                   - List batches (filter: status)
    # POST   /api/batches/                   - Create an in-progress batch
    # GET    /api/batches/{id}/              - Batch with line items
    # DELETE /api/batches/{id}/              - Discard an unconfirmed batch
    # GET    /api/batches/candidates/        - Items eligible for a batch (filter: channel)
    # GET    /api/batches/{id}/confirmable/  - Open line items with suggested prices
    # POST   /api/batches/{id}/confirm/      - Confirm with final prices
    path('', include(router.urls)),
]
