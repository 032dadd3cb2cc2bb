# vendors/api/views.py

from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.generics import GenericAPIView, RetrieveAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ledger.permissions import CanPostLedger
from vendors.api.serializers import VendorSerializer
from vendors.models import Vendor


class VendorListCreateView(GenericAPIView):
    serializer_class = VendorSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [CanPostLedger()]
        return [IsAuthenticated()]

    @extend_schema(
        tags=["vendors"],
        parameters=[
            OpenApiParameter("include_inactive", bool, description="Include deactivated vendors"),
            OpenApiParameter("search", str, description="Match on name or company name"),
        ],
        responses=VendorSerializer(many=True),
    )
    def get(self, request):
        qs = Vendor.objects.all().order_by("name")

        include_inactive = (request.query_params.get("include_inactive") or "").lower()
        if include_inactive not in ("1", "true", "yes"):
            qs = qs.filter(is_active=True)

        search = (request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(company_name__icontains=search))

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(VendorSerializer(page, many=True).data)
        return Response(VendorSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["vendors"],
        request=VendorSerializer,
        responses={201: VendorSerializer},
    )
    def post(self, request):
        s = VendorSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        vendor = s.save()
        return Response(VendorSerializer(vendor).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["vendors"])
class VendorDetailView(RetrieveAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = VendorSerializer
    queryset = Vendor.objects.all()
    lookup_url_kwarg = "vendor_id"
