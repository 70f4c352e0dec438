from rest_framework import permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from .services import OrderingWindowService


class OrderingWindowStatusView(APIView):
    """Public: whether new orders are currently accepted."""

    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request):
        status = OrderingWindowService().get_status()
        return Response(status.as_dict())
