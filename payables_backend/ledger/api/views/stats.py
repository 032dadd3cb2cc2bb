# ledger/api/views/stats.py

"""
PATH: ledger/api/views/stats.py

VENDOR DASHBOARD STATS

Read-only, computed live from inventory + payments + cached balance.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from ledger.api.serializers import VendorStatsSerializer
from ledger.services.stats_service import vendor_stats


class VendorStatsView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["ledger"], responses=VendorStatsSerializer)
    def get(self, request, vendor_id):
        stats = vendor_stats(vendor_id)
        if "error" in stats:
            return Response(stats, status=status.HTTP_404_NOT_FOUND)
        return Response(VendorStatsSerializer(stats).data, status=status.HTTP_200_OK)
