from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from core.utils import IsHomeOwner, IsHousekeeper
from apps.verification.serializers import eligibility_payload
from .serializers import UserSerializer, HomeOwnerProfileSerializer, HousekeeperProfileSerializer


class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(responses={200: UserSerializer, 401: 'Unauthorized'})
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class HomeOwnerProfileView(APIView):
    permission_classes = [IsAuthenticated, IsHomeOwner]

    @swagger_auto_schema(responses={200: HomeOwnerProfileSerializer, 403: 'Forbidden'})
    def get(self, request):
        return Response(HomeOwnerProfileSerializer(request.user.homeowner).data)


class HousekeeperProfileView(APIView):
    permission_classes = [IsAuthenticated, IsHousekeeper]

    @swagger_auto_schema(
        operation_description="Your housekeeper profile with the current eligibility verdict.",
        responses={200: HousekeeperProfileSerializer, 403: 'Forbidden'}
    )
    def get(self, request):
        housekeeper = request.user.housekeeper
        data = HousekeeperProfileSerializer(housekeeper).data
        data['eligibility'] = eligibility_payload(housekeeper)
        return Response(data)
