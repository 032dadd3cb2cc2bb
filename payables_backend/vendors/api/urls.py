# vendors/api/urls.py

from django.urls import path

from vendors.api.views import VendorDetailView, VendorListCreateView

urlpatterns = [
    path("", VendorListCreateView.as_view(), name="vendor-list"),
    path("<uuid:vendor_id>/", VendorDetailView.as_view(), name="vendor-detail"),
]
