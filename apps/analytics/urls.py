from django.urls import path
from . import views

app_name = 'analytics'

urlpatterns = [
    path('summary/', views.profit_summary, name='summary'),
    path('monthly/', views.monthly_series, name='monthly'),
    path('dashboard/', views.dashboard, name='dashboard'),
]
